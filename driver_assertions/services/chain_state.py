"""Chain/query mode tracking.

``chain()`` and ``query(selector)`` push a frame, ``end()`` pops one. The
stack is an immutable value: every transition returns a new ``ChainStack``
and the session swaps its reference, so no caller can toggle a mode flag
behind another's back.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..models import ChainState, FrameKind


@dataclass(frozen=True)
class ChainFrame:
    """One open chain or query."""
    kind: FrameKind
    selector: Optional[str] = None


@dataclass(frozen=True)
class ChainStack:
    """Immutable stack of open frames, innermost last."""
    frames: Tuple[ChainFrame, ...] = ()

    def push_chain(self) -> "ChainStack":
        return ChainStack(self.frames + (ChainFrame(FrameKind.CHAINING),))

    def push_query(self, selector: str) -> "ChainStack":
        return ChainStack(self.frames + (ChainFrame(FrameKind.QUERYING, selector),))

    def pop(self) -> Tuple["ChainStack", Optional[ChainFrame]]:
        """Pop the innermost frame.

        Returns:
            Tuple of (remaining stack, popped frame); popping an empty stack
            returns the same stack and None
        """
        if not self.frames:
            return self, None
        return ChainStack(self.frames[:-1]), self.frames[-1]

    @property
    def state(self) -> ChainState:
        if not self.frames:
            return ChainState.IDLE
        if self.frames[-1].kind == FrameKind.CHAINING:
            return ChainState.CHAINING
        return ChainState.QUERYING

    @property
    def chaining(self) -> bool:
        """Whether any chain is open."""
        return any(frame.kind == FrameKind.CHAINING for frame in self.frames)

    @property
    def querying(self) -> bool:
        """Whether any query is open."""
        return self._innermost_query() is not None

    @property
    def active_selector(self) -> Optional[str]:
        """Selector of the innermost open query."""
        frame = self._innermost_query()
        return frame.selector if frame else None

    def _innermost_query(self) -> Optional[ChainFrame]:
        for frame in reversed(self.frames):
            if frame.kind == FrameKind.QUERYING:
                return frame
        return None

    def __len__(self) -> int:
        return len(self.frames)
