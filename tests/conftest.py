# tests/conftest.py
"""
Fixtures compartilhados para testes do Event Stream Config.

Este módulo define fixtures reutilizáveis que fornecem:
- um conjunto realista de stream configs (nomes, padrão, formato ordinal)
- settings default com prefixos de tópico
- conteúdos YAML para testes do loader

Decisões arquiteturais:
    - Fixtures retornam cópias novas a cada teste
    - Dados retornados são determinísticos e isolados
    - Conteúdo de arquivos é fornecido como string; o teste decide
      onde gravá-lo (via `tmp_path`)

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture constrói o registry (cada teste o faz explicitamente)

Limites explícitos:
    - Não substituir testes de integração de adapters HTTP
"""

import pytest


# =====================================================
# Stream configs
# =====================================================

@pytest.fixture
def stream_configs() -> dict:
    """
    Fixture que fornece stream configs cobrindo os formatos suportados.

    Entradas:
        - 0: formato histórico (chave ordinal com `stream` embutido)
        - nonya: tópicos explícitos
        - eventlogging_Test: `topic_prefixes` anulado com None
        - test.event: prefixos próprios, sobrescrevendo os defaults
        - /^mediawiki\\.job\\..+/: entrada por padrão regex

    Returns:
        dict: Stream configs indexadas por chave declarada.
    """
    return {
        0: {
            "stream": "integer_indexed",
            "schema_title": "integer_indexed_schema",
            "destination_event_service": "eventgate-main",
        },
        "nonya": {
            "stream": "nonya",
            "schema_title": "mediawiki/nonya",
            "sample": {"rate": 0.5},
            "destination_event_service": "eventgate-analytics",
            "topics": ["nonya_topic"],
        },
        "eventlogging_Test": {
            "stream": "eventlogging_Test",
            "schema_title": "analytics/legacy/test",
            "sample": {"rate": 1.0, "unit": "session"},
            "destination_event_service": "eventgate-analytics",
            "topic_prefixes": None,
        },
        "test.event": {
            "stream": "test.event",
            "schema_title": "test/event",
            "sample": {"rate": 1.0, "unit": "session"},
            "destination_event_service": "eventgate-main",
            "topic_prefixes": ["dc1.", "dc2."],
        },
        r"/^mediawiki\.job\..+/": {
            "stream": r"/^mediawiki\.job\..+/",
            "schema_title": "mediawiki/job",
            "sample": {"rate": 0.8},
            "destination_event_service": "eventgate-main",
        },
    }


@pytest.fixture
def default_settings() -> dict:
    """Settings default aplicados a todas as entradas: prefixos por datacenter."""
    return {"topic_prefixes": ["eqiad.", "codfw."]}


@pytest.fixture
def nonya_settings() -> dict:
    """Settings mínimos de um stream nomeado, sem chaves reservadas."""
    return {
        "schema_title": "mediawiki/nonya",
        "sample": {"rate": 0.5},
        "destination_event_service": "eventgate-analytics",
    }


@pytest.fixture
def job_pattern() -> str:
    return r"/^mediawiki\.job\..+/"


# =====================================================
# Loader fixtures
# =====================================================

@pytest.fixture
def streams_yaml() -> str:
    """
    Fixture que fornece um YAML de configuração de streams semelhante ao uso real.

    Returns:
        str: Conteúdo YAML com `EventStreams` e `EventStreamsDefaultSettings`.
    """
    return """\
EventStreams:
  test.event:
    schema_title: test/event
    destination_event_service: eventgate-main
  /^mediawiki\\.job\\..+/:
    schema_title: mediawiki/job
    sample:
      rate: 0.8
EventStreamsDefaultSettings:
  topic_prefixes:
    - eqiad.
    - codfw.
  sample:
    unit: session
"""


@pytest.fixture
def streams_local_yaml() -> str:
    """YAML de override local: muda a taxa do padrão de jobs e os prefixos."""
    return """\
EventStreams:
  /^mediawiki\\.job\\..+/:
    sample:
      rate: 0.1
EventStreamsDefaultSettings:
  topic_prefixes:
    - dc1.
"""
