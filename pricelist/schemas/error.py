"""
Error body returned by every non-2xx response.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class ApiError(BaseModel):
    """``{code, message, details?}`` where details maps a field path to its messages."""
    code: str
    message: str
    details: Optional[Dict[str, List[str]]] = None
