from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class BillingError(DomainError):
    """Falha ao falar com o provedor de pagamento.

    ``code`` identifica o ponto da falha (lookup, criacao de customer,
    criacao de sessao) e so aparece nos logs, nunca na resposta.
    """

    def __init__(self, message: str, *, code: str = "unexpected"):
        super().__init__(message)
        self.code = code


class WebhookSignatureError(DomainError):
    """Assinatura do webhook ausente ou invalida."""


class CheckoutRequestError(DomainError):
    """Resposta de erro do endpoint de checkout vista pelo cliente."""

    def __init__(self, message: str, *, status_code: int):
        super().__init__(message)
        self.status_code = status_code
