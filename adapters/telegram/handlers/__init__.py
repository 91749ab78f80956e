from adapters.telegram.handlers import start, registration, substitute, waiver, league

# IMPORTANT: State-specific routers must be BEFORE start router
# because start.py has fallback handlers that would catch callbacks/messages
routers = [
    registration.router,  # Player wizard - FSM states
    substitute.router,    # Substitute pool - FSM states
    waiver.router,        # Waiver signing - FSM states
    league.router,        # Read-only views + subscriptions
    start.router,         # Last: has catch-all handlers
]

__all__ = ["routers"]
