"""
Exceptions for Trackman.

All errors are LifecycleError with a structured code for programmatic handling.
"""

from typing import Any


class BaseError(Exception):
    """
    Exception carrying a code, a human-readable message and context data.

    Subclasses declare `_default_messages` so callers only need the code.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r})"


class LifecycleError(BaseError):
    """
    Structured exception for product lifecycle operations.

    Usage:
        try:
            lifecycle.change_status(produto, 'APPROVED', user=u, role=Role.OPERATOR)
        except LifecycleError as e:
            if e.code == 'PERMISSION_DENIED':
                print(e.reason)

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_STATUS': 'Status inválido',
        'PRODUCT_NOT_FOUND': 'Produto não encontrado',
        'NO_OP_TRANSITION': 'Produto já se encontra neste status',
        'ILLEGAL_TRANSITION': 'Transição não permitida',
        'PERMISSION_DENIED': 'Permissão negada',
        'MISSING_REQUIRED_FIELDS': 'Campos obrigatórios em falta',
        'COMMIT_CONFLICT': 'Status alterado por outra operação, recarregue o produto',
        'PERSISTENCE_FAILURE': 'Erro ao mudar status do produto',
        'INVALID_QUANTITY': 'Quantidade inválida ou menor que 1',
        'DUPLICATE_CODE': 'Código interno já existe para esta empresa',
    }

    _http_statuses = {
        'PERMISSION_DENIED': 403,
        'PRODUCT_NOT_FOUND': 404,
        'COMMIT_CONFLICT': 409,
        'DUPLICATE_CODE': 409,
        'PERSISTENCE_FAILURE': 500,
    }

    # data key -> API payload key
    _payload_keys = {
        'current_status': 'currentStatus',
        'attempted_status': 'attemptedStatus',
        'allowed_next_states': 'allowedNextStates',
        'missing_fields': 'missingFields',
        'valid_statuses': 'validStatuses',
        'reason': 'reason',
    }

    @property
    def is_transient(self) -> bool:
        """Only a commit conflict may succeed when retried with fresh state."""
        return self.code == 'COMMIT_CONFLICT'

    @property
    def http_status(self) -> int:
        return self._http_statuses.get(self.code, 400)

    @property
    def reason(self) -> str | None:
        """Shortcut for data['reason']."""
        return self.data.get('reason')

    @property
    def missing_fields(self) -> list[str]:
        """Shortcut for data['missing_fields']."""
        return self.data.get('missing_fields', [])

    @property
    def allowed_next_states(self) -> list[str]:
        """Shortcut for data['allowed_next_states']."""
        return self.data.get('allowed_next_states', [])

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {k: _plain(v) for k, v in self.data.items()},
        }

    def as_payload(self) -> dict[str, Any]:
        """Response body in the shape the HTTP layer returns."""
        payload = {'error': self.message}
        for key, value in self.data.items():
            if key in self._payload_keys:
                payload[self._payload_keys[key]] = _plain(value)
        return payload


def _plain(value):
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if value is None or isinstance(value, (bool, int)):
        return value
    return str(value)
