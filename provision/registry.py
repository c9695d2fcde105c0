"""
Registry for provisioning actions.

The registry is an ordered list of named actions. An action's identity is
its position in the list, which is also the index an operator types in the
selection menu. The registry is built once at start-up and then frozen.
"""

from typing import Any, Callable, Iterator, List

from pydantic import BaseModel, ConfigDict


class Action(BaseModel):
    """A named, parameterless provisioning step."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    label: str
    run: Callable[[], Any]


class ActionRegistry:
    """
    Ordered, append-only collection of actions.

    The completion command ("done") is not an action; its numeric form is
    `sentinel_index`, the position right after the last action.
    """

    def __init__(self) -> None:
        self._actions: List[Action] = []
        self._frozen = False

    def register(
        self, name: str, label: str, run: Callable[[], Any]
    ) -> Action:
        """
        Append an action.

        Args:
            name: Stable identifier, used in banners.
            label: Display text in the checklist.
            run: Zero-argument callable performing the step.

        Returns:
            The registered action.

        Raises:
            RuntimeError: If the registry has been frozen.
            ValueError: If an action with the same name already exists.
        """
        if self._frozen:
            raise RuntimeError(
                f"Cannot register '{name}': the action registry is frozen"
            )
        if any(action.name == name for action in self._actions):
            raise ValueError(f"Action with name '{name}' already registered")

        action = Action(name=name, label=label, run=run)
        self._actions.append(action)
        return action

    def freeze(self) -> "ActionRegistry":
        self._frozen = True
        return self

    def get(self, index: int) -> Action:
        """
        Return the action at `index`.

        Raises:
            IndexError: If `index` is negative or not below `count()`.
        """
        if not 0 <= index < len(self._actions):
            raise IndexError(
                f"Action index {index} out of range (0..{len(self._actions) - 1})"
            )
        return self._actions[index]

    def count(self) -> int:
        return len(self._actions)

    @property
    def sentinel_index(self) -> int:
        return len(self._actions)

    def names(self) -> List[str]:
        return [action.name for action in self._actions]

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(list(self._actions))
