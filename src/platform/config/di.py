"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.cloakroom.app.command.assign_slot_use_case import AssignSlotUseCase
from src.service.cloakroom.app.command.create_event_use_case import CreateEventUseCase
from src.service.cloakroom.app.command.initialize_pool_use_case import InitializePoolUseCase
from src.service.cloakroom.app.command.issue_ticket_use_case import IssueTicketUseCase
from src.service.cloakroom.app.command.release_slot_use_case import ReleaseSlotUseCase
from src.service.cloakroom.app.command.return_slot_use_case import ReturnSlotUseCase
from src.service.cloakroom.app.command.take_slot_use_case import TakeSlotUseCase
from src.service.cloakroom.app.query.get_event_use_case import GetEventUseCase
from src.service.cloakroom.app.query.get_pool_stats_use_case import GetPoolStatsUseCase
from src.service.cloakroom.app.query.get_ticket_use_case import GetTicketUseCase
from src.service.cloakroom.app.query.list_active_events_use_case import ListActiveEventsUseCase
from src.service.cloakroom.driven_adapter.state.event_registry_state_handler_impl import (
    EventRegistryStateHandlerImpl,
)
from src.service.cloakroom.driven_adapter.state.location_pool_state_handler_impl import (
    LocationPoolStateHandlerImpl,
)
from src.service.cloakroom.driven_adapter.state.ticket_ledger_state_handler_impl import (
    TicketLedgerStateHandlerImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # State handlers (stateless - all state lives in Kvrocks)
    event_registry_state_handler = providers.Singleton(
        EventRegistryStateHandlerImpl, settings=config_service
    )
    pool_state_handler = providers.Singleton(LocationPoolStateHandlerImpl)
    ticket_ledger_state_handler = providers.Singleton(TicketLedgerStateHandlerImpl)

    # Location pool use cases
    initialize_pool_use_case = providers.Singleton(
        InitializePoolUseCase,
        pool_state_handler=pool_state_handler,
        settings=config_service,
    )
    take_slot_use_case = providers.Singleton(
        TakeSlotUseCase, pool_state_handler=pool_state_handler
    )
    return_slot_use_case = providers.Singleton(
        ReturnSlotUseCase, pool_state_handler=pool_state_handler
    )
    get_pool_stats_use_case = providers.Singleton(
        GetPoolStatsUseCase, pool_state_handler=pool_state_handler
    )

    # Event registry use cases
    create_event_use_case = providers.Singleton(
        CreateEventUseCase,
        event_registry_state_handler=event_registry_state_handler,
        initialize_pool_use_case=initialize_pool_use_case,
        settings=config_service,
    )
    get_event_use_case = providers.Singleton(
        GetEventUseCase, event_registry_state_handler=event_registry_state_handler
    )
    list_active_events_use_case = providers.Singleton(
        ListActiveEventsUseCase, event_registry_state_handler=event_registry_state_handler
    )

    # Ticket ledger use cases
    issue_ticket_use_case = providers.Singleton(
        IssueTicketUseCase,
        event_registry_state_handler=event_registry_state_handler,
        ticket_ledger_state_handler=ticket_ledger_state_handler,
        settings=config_service,
    )
    assign_slot_use_case = providers.Singleton(
        AssignSlotUseCase,
        event_registry_state_handler=event_registry_state_handler,
        ticket_ledger_state_handler=ticket_ledger_state_handler,
        pool_state_handler=pool_state_handler,
    )
    release_slot_use_case = providers.Singleton(
        ReleaseSlotUseCase,
        event_registry_state_handler=event_registry_state_handler,
        ticket_ledger_state_handler=ticket_ledger_state_handler,
        pool_state_handler=pool_state_handler,
    )
    get_ticket_use_case = providers.Singleton(
        GetTicketUseCase, ticket_ledger_state_handler=ticket_ledger_state_handler
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
