"""Positions and allocation outcomes for the ordering engine."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, model_validator


class PositionKind(str, Enum):
    AT_START = "at_start"
    AT_END = "at_end"
    BEFORE = "before"   # Immediately before the anchor
    AFTER = "after"     # Immediately after the anchor


class Position(BaseModel):
    """Where a moved entity should land in its target scope."""

    kind: PositionKind = PositionKind.AT_END
    anchor_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_anchor(self) -> "Position":
        anchored = self.kind in (PositionKind.BEFORE, PositionKind.AFTER)
        if anchored and not self.anchor_id:
            raise ValueError(f"{self.kind.value} position requires an anchor id")
        if not anchored and self.anchor_id is not None:
            raise ValueError(f"{self.kind.value} position takes no anchor id")
        return self

    @classmethod
    def at_start(cls) -> "Position":
        return cls(kind=PositionKind.AT_START)

    @classmethod
    def at_end(cls) -> "Position":
        return cls(kind=PositionKind.AT_END)

    @classmethod
    def before(cls, anchor_id: str) -> "Position":
        return cls(kind=PositionKind.BEFORE, anchor_id=anchor_id)

    @classmethod
    def after(cls, anchor_id: str) -> "Position":
        return cls(kind=PositionKind.AFTER, anchor_id=anchor_id)

    @classmethod
    def from_anchors(
        cls,
        before_id: Optional[str] = None,
        after_id: Optional[str] = None,
    ) -> "Position":
        """
        Translate the drag-and-drop wire form.

        ``before_id`` names the entity that ends up right before the moved one,
        ``after_id`` the entity that ends up right after it. ``before_id`` wins
        when both are sent; neither means "append at the end".
        """
        if before_id:
            return cls.after(before_id)
        if after_id:
            return cls.before(after_id)
        return cls.at_end()


class Neighbors(BaseModel):
    """Ranks on either side of the target slot. Absent means open-ended."""

    left_rank: Optional[int] = None
    right_rank: Optional[int] = None


class Allocated(BaseModel):
    rank: int


class Collision(BaseModel):
    """No integer lies strictly between the two neighbors."""

    left_rank: Optional[int] = None
    right_rank: Optional[int] = None


Allocation = Union[Allocated, Collision]
