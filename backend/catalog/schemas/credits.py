"""Credit entries: a plain name or a structured contributor."""
from typing import Annotated, Any, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, StringConstraints

CreditName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class PlainName(BaseModel):
    """Credit given as just a name."""
    kind: Literal["plain"] = "plain"
    name: CreditName


class Contributor(BaseModel):
    """Credit with an optional role ("mix engineer", "vocals", ...)."""
    kind: Literal["contributor"] = "contributor"
    name: CreditName
    role: Optional[str] = None


def coerce_credit(value: Any) -> Any:
    """Accept a bare string or an untagged {name, role} object."""
    if isinstance(value, str):
        return {"kind": "plain", "name": value}
    if isinstance(value, dict) and "kind" not in value:
        return {"kind": "contributor", **value}
    return value


Credit = Annotated[Union[PlainName, Contributor], BeforeValidator(coerce_credit)]
CreditList = Optional[List[Credit]]


def dump_credits(credits: Optional[List[Union[PlainName, Contributor]]]) -> Optional[list]:
    """JSON-ready credit list for storage; empty lists are stored as NULL."""
    if not credits:
        return None
    return [c.model_dump(exclude_none=True) for c in credits]


def credit_names(credits: Optional[Iterable[Any]]) -> List[str]:
    """Names from stored or validated credits, in order."""
    names = []
    for entry in credits or []:
        if isinstance(entry, str):
            names.append(entry)
        elif isinstance(entry, dict):
            if entry.get("name"):
                names.append(entry["name"])
        elif getattr(entry, "name", None):
            names.append(entry.name)
    return names
