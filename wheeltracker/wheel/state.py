"""State machine enums for option trades and share positions."""

from enum import Enum

from .exceptions import InvalidStateError


class OptionType(str, Enum):
    """Option contract type."""

    PUT = "PUT"
    CALL = "CALL"


class TradeAction(str, Enum):
    """Order action used to open the trade."""

    SELL_TO_OPEN = "SELL_TO_OPEN"
    BUY_TO_OPEN = "BUY_TO_OPEN"
    SELL_TO_CLOSE = "SELL_TO_CLOSE"
    BUY_TO_CLOSE = "BUY_TO_CLOSE"

    @property
    def is_sell(self) -> bool:
        """True for actions that collect premium."""
        return self in (TradeAction.SELL_TO_OPEN, TradeAction.SELL_TO_CLOSE)


class TradeStatus(str, Enum):
    """
    Lifecycle status of an option trade.

    A trade is created OPEN and moves exactly once into one of the
    terminal states. Terminal states never transition again.
    """

    OPEN = "OPEN"  # Contract still outstanding
    CLOSED = "CLOSED"  # Bought back before expiration
    ASSIGNED = "ASSIGNED"  # Exercised against us, shares changed hands
    EXPIRED = "EXPIRED"  # Lapsed worthless - KEEP PREMIUM
    ROLLED = "ROLLED"  # Replaced by a successor trade


class CloseMethod(str, Enum):
    """How an OPEN trade left the OPEN state."""

    BUYBACK = "BUYBACK"
    ROLL = "ROLL"
    EXPIRED = "EXPIRED"
    ASSIGNED = "ASSIGNED"


class PositionStatus(str, Enum):
    """Lifecycle status of a share lot."""

    OPEN = "OPEN"
    SOLD = "SOLD"


class AcquisitionType(str, Enum):
    """How a share lot was acquired."""

    ASSIGNED_PUT = "ASSIGNED_PUT"
    ASSIGNED_CALL = "ASSIGNED_CALL"
    DIRECT_PURCHASE = "DIRECT_PURCHASE"


# Valid transitions for the trade state machine
TRADE_TRANSITIONS: dict[TradeStatus, dict[str, TradeStatus]] = {
    TradeStatus.OPEN: {
        "buyback": TradeStatus.CLOSED,
        "expire": TradeStatus.EXPIRED,
        "assign": TradeStatus.ASSIGNED,
        "roll": TradeStatus.ROLLED,
    },
    TradeStatus.CLOSED: {},
    TradeStatus.EXPIRED: {},
    TradeStatus.ASSIGNED: {},
    TradeStatus.ROLLED: {},
}

# Valid transitions for the position state machine
POSITION_TRANSITIONS: dict[PositionStatus, dict[str, PositionStatus]] = {
    PositionStatus.OPEN: {
        "sell": PositionStatus.SOLD,
    },
    PositionStatus.SOLD: {},
}

# Close method recorded for each trade action
CLOSE_METHOD_ACTIONS: dict[CloseMethod, str] = {
    CloseMethod.BUYBACK: "buyback",
    CloseMethod.EXPIRED: "expire",
    CloseMethod.ASSIGNED: "assign",
    CloseMethod.ROLL: "roll",
}


def get_valid_actions(status: TradeStatus) -> list[str]:
    """Get list of valid actions from a given trade status."""
    return list(TRADE_TRANSITIONS.get(status, {}).keys())


def can_transition(from_status: TradeStatus, action: str) -> bool:
    """Check if a trade transition is valid from the current status."""
    return action in TRADE_TRANSITIONS.get(from_status, {})


def get_next_status(from_status: TradeStatus, action: str) -> TradeStatus:
    """
    Get the trade status after an action.

    Raises:
        InvalidStateError: If the transition is not valid.
    """
    transitions = TRADE_TRANSITIONS.get(from_status, {})
    if action not in transitions:
        valid = get_valid_actions(from_status)
        raise InvalidStateError(
            f"Invalid action '{action}' from status '{from_status.value}'. "
            f"Valid actions: {valid}"
        )
    return transitions[action]


def get_next_position_status(
    from_status: PositionStatus, action: str
) -> PositionStatus:
    """
    Get the position status after an action.

    Raises:
        InvalidStateError: If the transition is not valid.
    """
    transitions = POSITION_TRANSITIONS.get(from_status, {})
    if action not in transitions:
        raise InvalidStateError(
            f"Invalid action '{action}' from position status '{from_status.value}'"
        )
    return transitions[action]
