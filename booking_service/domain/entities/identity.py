from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    operator = "operator"
    client = "client"


@dataclass(frozen=True)
class Identity:
    user_id: str  # for clients this is the verified e-mail address
    role: Role

    @property
    def is_operator(self) -> bool:
        return self.role == Role.operator
