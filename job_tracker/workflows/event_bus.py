"""Event bus dispatching lifecycle events to workflow handlers"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Type

from .events import LifecycleEvent, WorkflowResult

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[Dict[str, Any]]]


class EventBus:
    """
    Lookup table from event type to a single async handler.

    A handler returns a dict of result data. Emitting never raises: a
    missing handler or a failing one is logged and reported through a
    failed WorkflowResult.
    """

    def __init__(self):
        self._handlers: Dict[Type, Handler] = {}

    def register(self, event_type: Type, handler: Handler) -> None:
        """Register the workflow for an event type, replacing any previous one"""
        self._handlers[event_type] = handler
        logger.debug(f"Registered workflow for {event_type.__name__}")

    def register_many(self, handlers: Dict[Type, Handler]) -> None:
        for event_type, handler in handlers.items():
            self.register(event_type, handler)
        logger.info(f"Event bus initialized with {len(handlers)} workflows")

    def registered_events(self) -> List[str]:
        return [event_type.__name__ for event_type in self._handlers]

    async def emit(self, event: LifecycleEvent) -> WorkflowResult:
        """Run the workflow registered for this event"""
        name = type(event).__name__
        handler = self._handlers.get(type(event))

        if handler is None:
            logger.warning(f"No workflow registered for event: {name}")
            return WorkflowResult(
                workflow=name,
                success=False,
                error=f"No workflow registered for event: {name}",
            )

        logger.info(f"Event emitted: {name}")
        logger.debug(f"Payload: {event}")

        try:
            data = await handler(event)
        except Exception as e:
            logger.error(f"Error in workflow {name}: {e}", exc_info=True)
            return WorkflowResult(workflow=name, success=False, error=str(e))

        logger.info(f"Workflow completed: {name}")
        return WorkflowResult(workflow=name, success=True, data=data or {})
