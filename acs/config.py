from __future__ import annotations
import json
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from .errors import InvalidConfig


@dataclass
class ACSConfig:
    alpha: float = 1.0          # pheromone influence (diversification only)
    beta: float = 1.0           # visibility influence
    rho: float = 0.5            # global evaporation / reinforcement
    Q: float = 1.0              # reward scale of the global update
    q0: float = 0.5             # exploitation threshold
    phi: float = 0.5            # local pheromone decay
    tau0: float = 0.1           # initial pheromone, also the local update baseline
    n_ants: int = 10
    n_iterations: int = 100
    initial_city: int = 0
    seed: Optional[int] = None

    def validate(self) -> "ACSConfig":
        for name in ("alpha", "beta", "tau0"):
            if getattr(self, name) < 0:
                raise InvalidConfig(f"{name} must be >= 0, got {getattr(self, name)}")
        for name in ("rho", "q0", "phi"):
            v = getattr(self, name)
            if not 0.0 <= v <= 1.0:
                raise InvalidConfig(f"{name} must be in [0, 1], got {v}")
        if self.Q <= 0:
            raise InvalidConfig(f"Q must be > 0, got {self.Q}")
        if self.n_ants < 1:
            raise InvalidConfig(f"n_ants must be >= 1, got {self.n_ants}")
        if self.n_iterations < 1:
            raise InvalidConfig(f"n_iterations must be >= 1, got {self.n_iterations}")
        if self.initial_city < 0:
            raise InvalidConfig(f"initial_city must be >= 0, got {self.initial_city}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ACSConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfig(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data).validate()

    @classmethod
    def from_json(cls, path: str) -> "ACSConfig":
        with open(path) as f:
            return cls.from_dict(json.load(f))
