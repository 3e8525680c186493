from typing import Any
from pydantic import BaseModel, ConfigDict

class IncrementRequest(BaseModel):
    """
    Body of POST /incr.

    Fields are deliberately loose: userId is checked and amount is coerced by
    build_increment so bad values get the documented defaults instead of a 422.
    """
    model_config = ConfigDict(extra='ignore')

    userId: Any = None
    amount: Any = None
