# src/event_stream_config/core/__init__.py
"""
Core do Event Stream Config.

Componentes principais:
    - config  → carregamento de arquivos, deep-merge, fingerprint e exceções
    - streams → StreamConfig, registry, factory e parsing de constraints

Princípios fundamentais:
    - Construção única, leitura concorrente sem locks
    - Nenhuma decisão silenciosa: erros de validação são fatais,
      streams não encontrados são registrados em log

Limites explícitos:
    - Não expõe endpoints HTTP nem serializa respostas
    - Não valida semântica de settings
"""
