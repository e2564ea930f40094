from src.service.cloakroom.app.interface.i_event_registry_state_handler import (
    IEventRegistryStateHandler,
)
from src.service.cloakroom.app.interface.i_location_pool_state_handler import (
    ILocationPoolStateHandler,
)
from src.service.cloakroom.app.interface.i_ticket_ledger_state_handler import (
    ITicketLedgerStateHandler,
)


__all__ = [
    'IEventRegistryStateHandler',
    'ILocationPoolStateHandler',
    'ITicketLedgerStateHandler',
]
