# tests/core/streams/test_factory.py
"""
Testes do StreamConfigsFactory.

Os testes asseguram que:
- opções obrigatórias ausentes são rejeitadas na construção do factory
- contributors recebem um dict vazio e suas entradas chegam ao registry
- `EventStreams` vence contribuições em chaves duplicadas
- entradas ordinais de ambas as fontes são preservadas
- `get_instance()` memoiza o registry até a configuração mudar
"""

import threading
from datetime import date

import pytest

from event_stream_config.core.config.errors import (
    InvalidStreamConfigError,
    MissingConfigOptionError,
)
from event_stream_config.core.config.loader import load_stream_settings
from event_stream_config.core.streams.factory import StreamConfigsFactory, merge_stream_sources
from event_stream_config.core.streams.registry import StreamConfigRegistry


@pytest.fixture
def options(stream_configs, default_settings):
    return {
        "EventStreams": stream_configs,
        "EventStreamsDefaultSettings": default_settings,
    }


@pytest.mark.parametrize("missing", ["EventStreams", "EventStreamsDefaultSettings"])
def test_missing_option_raises(options, missing):
    del options[missing]
    with pytest.raises(MissingConfigOptionError):
        StreamConfigsFactory(options)


def test_option_with_wrong_type_raises(options):
    options["EventStreams"] = "nonya"
    with pytest.raises(InvalidStreamConfigError):
        StreamConfigsFactory(options)


def test_create_builds_registry(options):
    registry = StreamConfigsFactory(options).create()
    assert isinstance(registry, StreamConfigRegistry)
    assert registry.get(["test.event"])["test.event"]["topics"] == [
        "dc1.test.event",
        "dc2.test.event",
    ]


def test_contributor_receives_empty_mapping_and_adds_streams(options):
    seen = []

    def contribute(stream_configs):
        seen.append(dict(stream_configs))
        stream_configs["contributed.stream"] = {"destination_event_service": "eventgate-main"}

    registry = StreamConfigsFactory(options, contributors=[contribute]).create()

    assert seen == [{}]
    assert registry.get(["contributed.stream"])["contributed.stream"]["topics"] == [
        "eqiad.contributed.stream",
        "codfw.contributed.stream",
    ]


def test_configured_streams_win_over_contributed(options):
    def contribute(stream_configs):
        stream_configs["nonya"] = {"destination_event_service": "contributed"}

    registry = StreamConfigsFactory(options, contributors=[contribute]).create()
    assert registry.get(["nonya"])["nonya"]["destination_event_service"] == "eventgate-analytics"


def test_merge_stream_sources_keeps_ordinal_entries():
    contributed = {0: {"stream": "a"}, "b": {"x": 1}}
    configured = {0: {"stream": "c"}, "b": {"x": 2}, "d": {}}

    merged = merge_stream_sources(contributed, configured)

    assert merged == {0: {"stream": "a"}, "b": {"x": 2}, 1: {"stream": "c"}, "d": {}}
    assert list(merged) == [0, "b", 1, "d"]


def test_get_instance_is_memoized(options):
    calls = []
    factory = StreamConfigsFactory(options, contributors=[lambda configs: calls.append(1)])

    first = factory.get_instance()
    second = factory.get_instance()

    assert first is second
    assert calls == [1]


def test_get_instance_rebuilds_when_config_changes(options):
    factory = StreamConfigsFactory(options)
    first = factory.get_instance()

    options["EventStreams"] = dict(options["EventStreams"], new_stream={"owner": "x"})
    second = factory.get_instance()

    assert second is not first
    assert "new_stream" in second
    assert "new_stream" not in first


def test_get_instance_concurrent_callers_share_one_registry(options):
    factory = StreamConfigsFactory(options)
    results = []

    def worker():
        results.append(factory.get_instance())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert all(r is results[0] for r in results)


def test_invalid_contributed_entry_aborts(options):
    def contribute(stream_configs):
        stream_configs["/bad(/"] = {}

    with pytest.raises(InvalidStreamConfigError):
        StreamConfigsFactory(options, contributors=[contribute]).get_instance()


def test_get_instance_accepts_non_json_setting_values():
    """
    Verifica que o fingerprint aceita valores que o YAML produz mas que não
    têm representação JSON (ex.: datas), como `create()` já aceita.
    """
    options = {
        "EventStreams": {"nonya": {"since": date(2020, 1, 1)}},
        "EventStreamsDefaultSettings": {},
    }
    factory = StreamConfigsFactory(options)

    registry = factory.get_instance()

    assert registry.get(["nonya"])["nonya"]["since"] == date(2020, 1, 1)
    assert factory.get_instance() is registry


def test_get_instance_from_yaml_with_date_setting(tmp_path):
    streams = tmp_path / "streams.yaml"
    streams.write_text(
        "EventStreams:\n  nonya:\n    since: 2020-01-01\n",
        encoding="utf-8",
    )

    registry = StreamConfigsFactory(load_stream_settings(streams_path=str(streams))).get_instance()

    assert registry.get(["nonya"])["nonya"]["since"] == date(2020, 1, 1)


def test_merge_stream_sources_renumbers_numeric_string_keys():
    merged = merge_stream_sources({"0": {"stream": "a"}}, {"0": {"stream": "b"}})
    assert merged == {0: {"stream": "a"}, 1: {"stream": "b"}}
