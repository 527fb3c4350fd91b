"""
Aggregate result and its two presentations (human lines / JSON document).
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from jsonschema import validate

from cmdtimer.runner import RunOutcome


RUN_RESULT_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "run result",
    "type": "object",
    "required": ["exit_code", "times", "mean"],
    "properties": {
        "exit_code": {"type": ["integer", "null"]},
        "times": {
            "type": "array",
            "minItems": 1,
            "items": {"type": "number", "minimum": 0},
        },
        "mean": {"type": "number", "minimum": 0},
        "exit_codes": {
            "type": "array",
            "items": {"type": ["integer", "null"]},
        },
    },
    "additionalProperties": False,
}


@dataclass
class RunResult:
    """Aggregate over all runs; exit_code is the last run's"""
    exit_code: Optional[int]
    times: List[float]
    mean: float
    exit_codes: List[Optional[int]] = field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: Sequence[RunOutcome]) -> "RunResult":
        if not outcomes:
            raise ValueError("at least one run is required")
        times = [o.elapsed_s for o in outcomes]
        return cls(
            exit_code=outcomes[-1].exit_code,
            times=times,
            mean=sum(times) / len(times),
            exit_codes=[o.exit_code for o in outcomes],
        )

    @property
    def runs(self) -> int:
        return len(self.times)

    def to_document(self) -> Dict[str, Any]:
        """Structured record, validated against RUN_RESULT_SCHEMA"""
        doc = {
            "exit_code": self.exit_code,
            "times": list(self.times),
            "mean": self.mean,
            "exit_codes": list(self.exit_codes),
        }
        validate(instance=doc, schema=RUN_RESULT_SCHEMA)
        return doc

    def render_json(self) -> str:
        return json.dumps(self.to_document(), indent=2)

    def render_human(self) -> str:
        return "\n".join([
            f"Exit code: {self.exit_code}",
            f"Runs: {self.runs}",
            f"Times: {self.times}",
            f"Mean: {self.mean:.3f} sec",
        ])
