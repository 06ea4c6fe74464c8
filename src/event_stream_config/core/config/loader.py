# src/event_stream_config/core/config/loader.py
"""
Loader de configuração de streams a partir de arquivos.

Este módulo carrega a configuração de processo que alimenta o registry
de streams a partir de arquivos YAML ou JSON.

A configuração é resolvida a partir de:
    - um arquivo principal (obrigatório)
    - um arquivo local de overrides (opcional)

Opções reconhecidas no arquivo:
    - `EventStreams`: mapping de nome/padrão de stream → settings,
      ou uma lista de settings (formato histórico, indexado por posição)
    - `EventStreamsDefaultSettings`: mapping de settings default (opcional)

Exemplo (YAML):

    EventStreams:
      test.event:
        schema_title: test/event
        destination_event_service: eventgate-main
      /^mediawiki\\.job\\..+/:
        schema_title: mediawiki/job
    EventStreamsDefaultSettings:
      topic_prefixes: [eqiad., codfw.]

Invariantes:
    - O resultado é sempre um dicionário com as duas opções presentes
    - Overrides locais nunca mutam a configuração principal

Limites explícitos:
    - Não constrói o registry (responsabilidade do factory)
    - Não valida entradas individuais de stream
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)

EVENT_STREAMS_OPTION = "EventStreams"
DEFAULT_SETTINGS_OPTION = "EventStreamsDefaultSettings"


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def _normalize(config: Dict[str, Any]) -> Dict[str, Any]:
    streams = config.get(EVENT_STREAMS_OPTION)
    if streams is None:
        streams = {}
    elif isinstance(streams, list):
        # formato histórico: lista de entradas com `stream` embutido
        streams = dict(enumerate(streams))
    elif not isinstance(streams, dict):
        raise InvalidConfigRootTypeError(
            f"{EVENT_STREAMS_OPTION} deve ser dict ou list, recebido: {type(streams).__name__}"
        )

    defaults = config.get(DEFAULT_SETTINGS_OPTION)
    if defaults is None:
        defaults = {}
    elif not isinstance(defaults, dict):
        raise InvalidConfigRootTypeError(
            f"{DEFAULT_SETTINGS_OPTION} deve ser dict, recebido: {type(defaults).__name__}"
        )

    normalized = dict(config)
    normalized[EVENT_STREAMS_OPTION] = streams
    normalized[DEFAULT_SETTINGS_OPTION] = defaults
    return normalized


def load_stream_settings(
    *,
    streams_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração de streams do processo.

    Política de resolução:
        - O arquivo principal é obrigatório
        - O arquivo local é opcional; se o caminho não existir, é ignorado
        - Quando presente, o local tem prioridade via `deep_merge`
        - Listas em `EventStreams` são convertidas para chaves ordinais
          após o merge

    Args:
        streams_path (str): Caminho para o arquivo principal.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração com `EventStreams` e
        `EventStreamsDefaultSettings` sempre presentes.

    Raises:
        ConfigFileNotFoundError: Se o arquivo principal não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se a raiz ou as opções tiverem tipo inválido.
    """
    effective = _load_file(Path(streams_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return _normalize(effective)
