from typing import Any, Protocol


class IDomainEventPublisher(Protocol):
    """Anything that can hand a committed domain event to its subscribers"""

    async def publish(self, *, event: Any) -> None: ...
