"""
Animation step records produced by the animated search and path replay.

A trace is an append-only list of steps; together they are the complete
observable record of one run. to_dict() gives a JSON-ready form with
"x,y" keys for handing across a thread or process boundary.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Union

from .graph import NodeKey, format_key


@dataclass(frozen=True)
class InitStep:
    type: ClassVar[str] = "init"
    current: NodeKey
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "current": format_key(self.current),
            "completed": self.completed,
        }


@dataclass(frozen=True)
class ExploreStep:
    type: ClassVar[str] = "explore"
    current: NodeKey
    visited_count: int
    newly_visited_count: int
    current_path: List[NodeKey] = field(default_factory=list)
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "current": format_key(self.current),
            "visited_count": self.visited_count,
            "newly_visited_count": self.newly_visited_count,
            "current_path": [format_key(k) for k in self.current_path],
            "completed": self.completed,
        }


@dataclass(frozen=True)
class CompleteStep:
    type: ClassVar[str] = "complete"
    current: NodeKey
    visited_count: int
    current_path: List[NodeKey] = field(default_factory=list)
    completed: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "current": format_key(self.current),
            "visited_count": self.visited_count,
            "current_path": [format_key(k) for k in self.current_path],
            "completed": self.completed,
        }


@dataclass(frozen=True)
class PathProgressStep:
    type: ClassVar[str] = "path_progress"
    current: NodeKey
    current_path: List[NodeKey]
    completed: bool
    total_steps: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "current": format_key(self.current),
            "current_path": [format_key(k) for k in self.current_path],
            "completed": self.completed,
            "total_steps": self.total_steps,
        }


AnimationStep = Union[InitStep, ExploreStep, CompleteStep, PathProgressStep]


def path_progress_steps(path: List[NodeKey]) -> List[PathProgressStep]:
    """
    Replay a finished path one node at a time.

    Each step carries the path prefix up to and including its node; the
    last step is marked completed.
    """
    total = len(path)
    return [
        PathProgressStep(
            current=key,
            current_path=list(path[:i + 1]),
            completed=(i == total - 1),
            total_steps=total,
        )
        for i, key in enumerate(path)
    ]


def steps_to_dicts(steps: List[AnimationStep]) -> List[Dict[str, Any]]:
    return [step.to_dict() for step in steps]
