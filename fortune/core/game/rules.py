"""
High-level rules API for controlling game flow.
This module provides the public interface for decisions and legal move detection.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional

from fortune.core.exceptions import OutOfTurnActionError
from fortune.core.game.decisions import DecisionRequest
from fortune.core.game.game import GameState, TurnPhase

if TYPE_CHECKING:
    from fortune.core.agents.base import Agent

logger = logging.getLogger(__name__)


class ActionType(Enum):
    """Types of actions a player can take."""

    ROLL_DICE = "roll_dice"
    BUY_SHOP = "buy_shop"
    DECLINE_SHOP = "decline_shop"
    PAY_FEE = "pay_fee"
    DRAW_CHANCE = "draw_chance"
    BUY_SHARES = "buy_shares"
    SELL_SHARES = "sell_shares"
    LEAVE_BANK = "leave_bank"


# Parameters each action accepts from the wire; anything else is rejected
ACTION_PARAMS = {
    ActionType.BUY_SHOP: {"position"},
    ActionType.DECLINE_SHOP: {"position"},
    ActionType.BUY_SHARES: {"district", "count"},
    ActionType.SELL_SHARES: {"district", "count"},
}


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: ActionType, /, **params: Any):
        self.action_type = action_type
        self.params = params

    def to_dict(self) -> dict:
        return {"action_type": self.action_type.value, "params": dict(self.params)}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return self.action_type == other.action_type and self.params == other.params

    def __repr__(self) -> str:
        return f"Action({self.action_type.value}, {self.params})"


def get_pending_request(game_state: GameState) -> Optional[DecisionRequest]:
    """The decision the current player owes, or None once the game has ended."""
    if game_state.game_over:
        return None
    return game_state.pending


def get_legal_actions(game_state: GameState, player_id: int) -> List[Action]:
    """
    Get all legal actions available to a player.

    This is the main interface for bots and controllers to determine valid moves.
    Share trades are listed once per district with the largest count the
    player can currently trade; any smaller positive count is also legal.

    Args:
        game_state: Current game state
        player_id: Player to get actions for

    Returns:
        List of legal Action objects
    """
    if game_state.game_over:
        return []

    current_player = game_state.get_current_player()
    if current_player.player_id != player_id:
        return []

    phase = game_state.phase
    actions: List[Action] = []

    if phase == TurnPhase.AWAITING_ROLL:
        actions.append(Action(ActionType.ROLL_DICE))
        actions.extend(_share_actions(game_state, player_id, buy=True, sell=True))

    elif phase == TurnPhase.AWAITING_PURCHASE_DECISION:
        offer = game_state.pending
        if game_state.ledger.can_afford(player_id, offer.price):
            actions.append(Action(ActionType.BUY_SHOP, position=offer.position))
        actions.append(Action(ActionType.DECLINE_SHOP, position=offer.position))

    elif phase == TurnPhase.AWAITING_FEE_PAYMENT:
        actions.append(Action(ActionType.PAY_FEE))
        actions.extend(_share_actions(game_state, player_id, buy=False, sell=True))

    elif phase == TurnPhase.AWAITING_CHANCE_EFFECT:
        actions.append(Action(ActionType.DRAW_CHANCE))

    elif phase == TurnPhase.AWAITING_BANK_VISIT:
        actions.append(Action(ActionType.LEAVE_BANK))
        actions.extend(_share_actions(game_state, player_id, buy=True, sell=True))

    return actions


def _share_actions(game_state: GameState, player_id: int, buy: bool, sell: bool) -> List[Action]:
    actions: List[Action] = []
    ledger = game_state.ledger
    player = game_state.players[player_id]

    for district_id in game_state.board.district_ids():
        if buy:
            price = ledger.district_price(district_id)
            affordable = max(ledger.available_cash(player_id), 0) // price
            count = min(affordable, game_state.districts[district_id].shares_available)
            if count > 0:
                actions.append(Action(ActionType.BUY_SHARES, district=district_id, count=count))
        if sell:
            held = player.shares_in(district_id)
            if held > 0:
                actions.append(Action(ActionType.SELL_SHARES, district=district_id, count=held))
    return actions


def apply_action(game_state: GameState, action: Action, player_id: Optional[int] = None) -> bool:
    """
    Apply an action to the game state.

    This is the main interface for executing decisions. Out-of-turn and
    out-of-phase actions are rejected without touching the state. Economic
    failures (InsufficientFundsError, ShareError) propagate to the caller,
    also without touching the state.

    Args:
        game_state: Current game state
        action: Action to apply
        player_id: Player executing the action (optional, defaults to current player)

    Returns:
        True if the action was applied, False if it was rejected
    """
    if player_id is None:
        player_id = game_state.get_current_player().player_id

    try:
        _dispatch(game_state, action, player_id)
    except OutOfTurnActionError as exc:
        logger.warning(f"Rejected {action!r} from player {player_id}: {exc}")
        return False
    return True


def _dispatch(game_state: GameState, action: Action, player_id: int) -> None:
    action_type = action.action_type

    if action_type == ActionType.ROLL_DICE:
        game_state.roll_dice(player_id)

    elif action_type == ActionType.BUY_SHOP:
        game_state.buy_shop(player_id)

    elif action_type == ActionType.DECLINE_SHOP:
        game_state.decline_shop(player_id)

    elif action_type == ActionType.PAY_FEE:
        game_state.pay_fee(player_id)

    elif action_type == ActionType.DRAW_CHANCE:
        game_state.draw_chance(player_id)

    elif action_type == ActionType.LEAVE_BANK:
        game_state.leave_bank(player_id)

    elif action_type == ActionType.BUY_SHARES:
        game_state.buy_shares(player_id, action.params.get("district"), action.params.get("count"))

    elif action_type == ActionType.SELL_SHARES:
        game_state.sell_shares(player_id, action.params.get("district"), action.params.get("count"))

    else:
        raise OutOfTurnActionError(f"Unrecognized action {action_type}")


def parse_action(action_type: str, params: Optional[dict] = None) -> Optional[Action]:
    """Build an Action from wire values.

    Returns None if the type is unknown or a parameter is not one the
    action accepts.
    """
    try:
        parsed = ActionType(action_type)
    except ValueError:
        return None
    params = dict(params or {})
    unexpected = set(params) - ACTION_PARAMS.get(parsed, set())
    if unexpected:
        logger.info(f"Rejecting {parsed.value}: unexpected params {sorted(unexpected)}")
        return None
    return Action(parsed, **params)


def step_turn(game_state: GameState, agent: "Agent", max_actions: int = 100) -> List[Action]:
    """
    Let an agent play the current player's turn until it passes to the next player.

    Returns:
        List of actions that were taken
    """
    actions_taken: List[Action] = []
    player_id = game_state.get_current_player().player_id
    start_turn = game_state.turn_number

    while (
        not game_state.game_over
        and game_state.turn_number == start_turn
        and len(actions_taken) < max_actions
    ):
        legal_actions = get_legal_actions(game_state, player_id)
        if not legal_actions:
            break
        action = agent.choose_action(game_state, legal_actions)
        if not apply_action(game_state, action, player_id):
            break
        actions_taken.append(action)

    return actions_taken
