"""Blendshape batch - The unit of one send call."""

from collections.abc import Iterator

from pydantic import BaseModel, Field

from blendrelay.config.constants import RELAY


class BlendshapeBatch(BaseModel):
    """Named blendshape weights plus the destination port.

    Schema (host payload):
    {
        "data": {"jawOpen": 0.75, "eyeBlinkLeft": 0.1},
        "port": 9000
    }

    Port 0 passes validation and is rejected when the destination is
    resolved, so the sender reports it as an address failure.
    """

    data: dict[str, float]
    port: int = Field(ge=RELAY.MIN_PORT, le=RELAY.MAX_PORT)

    def __len__(self) -> int:
        return len(self.data)

    def items(self) -> Iterator[tuple[str, float]]:
        """Iterate (name, value) entries. Order is not part of the contract."""
        return iter(self.data.items())
