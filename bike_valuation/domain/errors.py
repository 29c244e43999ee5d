'''Errors raised by the valuation framework.'''

from typing import Any, Optional, Sequence


class InvalidInput(ValueError):
  '''
  A valuation input failed validation.

  Attributes:
    field: Name of the rejected input ('originalPrice', 'year',
      'condition' or 'brandTier')
    value: The rejected value as received
    allowed: Accepted values for enumerated fields, otherwise None
  '''

  def __init__(
      self,
      field: str,
      value: Any,
      allowed: Optional[Sequence[str]] = None,
      reason: Optional[str] = None,
  ):
    self.field = field
    self.value = value
    self.allowed = tuple(allowed) if allowed is not None else None

    message = f'Invalid {field}: {value!r}'
    if reason:
      message += f' ({reason})'
    if self.allowed:
      message += f'. Allowed values: {", ".join(self.allowed)}'
    super().__init__(message)
