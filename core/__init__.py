"""
Funcionalidades centrais do cotacao-ingest.

Este módulo contém:
- Configuração (config.py)
- Logging (logger.py)
"""
