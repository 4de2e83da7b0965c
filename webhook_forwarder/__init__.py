"""Pacote do encaminhador de webhooks (genérico/Grafana) para um destinatário.

Este pacote contém:
- constants: variáveis de ambiente e política de normalização
- utils: helpers de decodificação com valores padrão
- detection: detecção do dialeto e prioridade do Grafana
- models: Notification e DeliveryOutcome
- errors: hierarquia de erros com status HTTP
- normalizer: normalização dos payloads
- services: canais de entrega (Gotify, Discord) e adaptador de entrega
- plugin: metadados e páginas informativas por destinatário
- controller: criação do Flask app e endpoints
"""
