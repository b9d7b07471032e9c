"""
Main game engine and turn state machine.
"""

import copy
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, cast

from fortune.core.exceptions import OutOfTurnActionError
from fortune.core.game.board import Board
from fortune.core.game.config import GameConfig, SuitAwardPolicy
from fortune.core.game.decisions import (
    BankVisit,
    ChanceDraw,
    DecisionRequest,
    FeeDue,
    PurchaseOffer,
    RollPrompt,
)
from fortune.core.game.dice import RandomnessSource
from fortune.core.game.ledger import EconomyLedger
from fortune.core.game.money import EventLog, EventType
from fortune.core.game.ownership import OwnershipRegistry
from fortune.core.game.player import DistrictRecord, Player, PlayerState
from fortune.core.game.tiles import ShopTile, SuitTile, TileType

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """Phases of the per-player turn state machine."""

    AWAITING_ROLL = "awaiting_roll"
    MOVING = "moving"
    RESOLVING_TILE = "resolving_tile"
    AWAITING_PURCHASE_DECISION = "awaiting_purchase_decision"
    AWAITING_FEE_PAYMENT = "awaiting_fee_payment"
    AWAITING_BANK_VISIT = "awaiting_bank_visit"
    AWAITING_CHANCE_EFFECT = "awaiting_chance_effect"
    TURN_SETTLED = "turn_settled"
    GAME_ENDED = "game_ended"


EndPredicate = Callable[["GameState"], bool]


class GameState:
    """
    Represents the complete state of a Fortune Street game.

    This is the single writer of game state: every mutation of ownership,
    cash or holdings happens through one of its transitions while exactly
    one turn is in flight. Awaiting phases are plain data, so a game can be
    copied or pickled in the middle of a turn and resumed later.
    """

    def __init__(
        self,
        config: GameConfig,
        players: List[Player],
        board: Optional[Board] = None,
        end_predicate: Optional[EndPredicate] = None,
    ):
        if not players:
            raise ValueError("A game needs at least one player")

        self.config = config
        self.board = board if board is not None else Board()
        self.event_log = EventLog()
        self.dice = RandomnessSource(config.seed, config.chance_table)
        self.end_predicate = end_predicate

        self.players: Dict[int, PlayerState] = {}
        for player in players:
            self.players[player.player_id] = PlayerState(player.player_id, player.name, config.starting_cash)

        self.districts: Dict[str, DistrictRecord] = {}
        for district_id in self.board.district_ids():
            data = self.board.get_district(district_id)
            self.districts[district_id] = DistrictRecord(shares_available=data.share_pool)

        self.ownership = OwnershipRegistry(self.board, self.players, self.districts, self.event_log)
        self.ledger = EconomyLedger(
            config, self.board, self.players, self.districts, self.ownership, self.event_log
        )

        self.current_player_index = 0
        self.turn_number = 0
        self.round_number = 0
        self.phase = TurnPhase.AWAITING_ROLL
        self.pending: Optional[DecisionRequest] = None
        self.last_roll: Optional[int] = None
        self.game_over = False
        self.winner: Optional[int] = None

        self.event_log.log(
            EventType.GAME_START,
            details={
                "players": [p.name for p in players],
                "starting_cash": config.starting_cash,
                "seed": config.seed,
                "tiles": self.board.cycle_length(),
            },
        )
        self._start_turn()

    # Players

    def get_current_player(self) -> PlayerState:
        """Get the current active player."""
        player_ids = sorted(self.players.keys())
        current_id = player_ids[self.current_player_index % len(player_ids)]
        return self.players[current_id]

    def get_active_players(self) -> List[PlayerState]:
        """Get all non-bankrupt players."""
        return [p for p in self.players.values() if not p.is_bankrupt]

    def shops_owned_by(self, player_id: int) -> List[int]:
        return self.ownership.shops_owned_by(player_id)

    def net_worth(self, player_id: int) -> int:
        return self.ledger.net_worth(player_id)

    def calculate_salary(self, player_id: int) -> int:
        """Promotion salary, increasing in both level and net worth."""
        player = self.players[player_id]
        worth = max(self.net_worth(player_id), 0)
        return (
            self.config.base_salary
            + self.config.salary_per_level * player.level
            + int(round(worth * self.config.salary_net_worth_rate))
        )

    def clone(self) -> "GameState":
        """Independent copy of the whole game, including the dice state."""
        return copy.deepcopy(self)

    def _require(self, player_id: int, *phases: TurnPhase) -> PlayerState:
        if self.game_over:
            raise OutOfTurnActionError("Game is over")
        current = self.get_current_player()
        if current.player_id != player_id:
            raise OutOfTurnActionError(
                f"Player {player_id} acted during player {current.player_id}'s turn"
            )
        if self.phase not in phases:
            raise OutOfTurnActionError(
                f"Action not allowed in phase {self.phase.value}"
            )
        return current

    # Rolling and moving

    def roll_dice(self, player_id: int) -> int:
        """
        Roll the die for the current player, move, and resolve the landing tile.
        Returns the rolled value.
        """
        self._require(player_id, TurnPhase.AWAITING_ROLL)
        roll = self.dice.roll_die()
        self.last_roll = roll
        self.phase = TurnPhase.MOVING

        self.event_log.log(EventType.DICE_ROLL, player_id=player_id, details={"value": roll})

        self.move_player(player_id, roll)
        self._resolve_tile(player_id)
        return roll

    def move_player(self, player_id: int, spaces: int) -> int:
        """
        Move a player forward by the specified number of tiles.
        Returns the new position.
        """
        player = self.players[player_id]
        length = self.board.cycle_length()
        old_position = player.position
        new_position = (old_position + spaces) % length

        player.position = new_position
        self.event_log.log(
            EventType.MOVE,
            player_id=player_id,
            details={"from": old_position, "to": new_position, "spaces": spaces},
        )

        if spaces > 0 and old_position + spaces >= length:
            self._pass_start(player_id)

        return new_position

    def _pass_start(self, player_id: int) -> None:
        bonus = self.config.pass_start_bonus
        if bonus > 0:
            self.ledger.credit(player_id, bonus)
        self.event_log.log(
            EventType.PASSED_START,
            player_id=player_id,
            details={"amount": bonus, "new_balance": self.players[player_id].cash},
        )

    # Tile resolution

    def _resolve_tile(self, player_id: int) -> None:
        self.phase = TurnPhase.RESOLVING_TILE
        player = self.players[player_id]
        tile = self.board.tile_at(player.position)

        self.event_log.log(
            EventType.LAND,
            player_id=player_id,
            details={"position": tile.position, "tile": tile.name, "tile_type": tile.tile_type.value},
        )

        if tile.tile_type == TileType.SHOP:
            self._resolve_shop(player_id, tile)

        elif tile.tile_type == TileType.CHANCE:
            self._await(TurnPhase.AWAITING_CHANCE_EFFECT, ChanceDraw(player_id, tile.position))

        elif tile.tile_type == TileType.BANK:
            self._visit_bank(player_id)

        elif tile.tile_type == TileType.SUIT:
            self.ownership.award_suit(player_id, cast(SuitTile, tile).suit)
            self._settle_turn()

        elif tile.tile_type == TileType.NEUTRAL:
            self._settle_turn()

        else:
            raise ValueError(f"Unhandled tile type {tile.tile_type}")

    def _resolve_shop(self, player_id: int, shop: ShopTile) -> None:
        owner_id = self.ownership.owner_of(shop.position)

        if owner_id is None:
            self._await(
                TurnPhase.AWAITING_PURCHASE_DECISION,
                PurchaseOffer(player_id, shop.position, shop.name, shop.price),
            )
        elif owner_id != player_id:
            fee = self.ledger.shop_fee(shop.position)
            self._await(
                TurnPhase.AWAITING_FEE_PAYMENT,
                FeeDue(player_id, shop.position, shop.name, owner_id, fee),
            )
        else:
            if shop.suit is not None and self.config.suit_award_policy == SuitAwardPolicy.ON_OWNER_LANDING:
                self.ownership.award_suit(player_id, shop.suit)
            self._settle_turn()

    def _visit_bank(self, player_id: int) -> None:
        player = self.players[player_id]
        promoted = False
        if len(player.suits) == 4:
            self._promote(player_id)
            promoted = True

        prices = {d: self.ledger.district_price(d) for d in self.board.district_ids()}
        self._await(TurnPhase.AWAITING_BANK_VISIT, BankVisit(player_id, promoted, player.level, prices))

    def _promote(self, player_id: int) -> None:
        player = self.players[player_id]
        player.level += 1
        player.suits.clear()
        self.event_log.log(EventType.LEVEL_UP, player_id=player_id, details={"level": player.level})

        salary = self.calculate_salary(player_id)
        self.ledger.credit(player_id, salary)
        self.event_log.log(
            EventType.SALARY,
            player_id=player_id,
            details={"amount": salary, "level": player.level, "new_balance": player.cash},
        )

    def _await(self, phase: TurnPhase, request: DecisionRequest) -> None:
        self.phase = phase
        self.pending = request

    # Decisions

    def buy_shop(self, player_id: int) -> None:
        """Accept the pending purchase offer."""
        self._require(player_id, TurnPhase.AWAITING_PURCHASE_DECISION)
        offer = cast(PurchaseOffer, self.pending)

        self.ledger.debit(player_id, offer.price)
        self.ownership.transfer(offer.position, player_id)

        shop = self.board.get_shop(offer.position)
        if shop.suit is not None and self.config.suit_award_policy == SuitAwardPolicy.ON_PURCHASE:
            self.ownership.award_suit(player_id, shop.suit)

        self.event_log.log(
            EventType.PURCHASE,
            player_id=player_id,
            details={
                "shop": offer.shop,
                "position": offer.position,
                "price": offer.price,
                "new_balance": self.players[player_id].cash,
            },
        )
        self._settle_turn()

    def decline_shop(self, player_id: int) -> None:
        """Decline the pending purchase offer."""
        self._require(player_id, TurnPhase.AWAITING_PURCHASE_DECISION)
        offer = cast(PurchaseOffer, self.pending)
        self.event_log.log(
            EventType.PURCHASE_DECLINED,
            player_id=player_id,
            details={"shop": offer.shop, "position": offer.position, "price": offer.price},
        )
        self._settle_turn()

    def pay_fee(self, player_id: int) -> int:
        """Pay the pending shop fee. Returns the amount actually paid."""
        self._require(player_id, TurnPhase.AWAITING_FEE_PAYMENT)
        due = cast(FeeDue, self.pending)

        paid = self._settle_debt(player_id, due.amount, due.owner_id)
        self.event_log.log(
            EventType.FEE_PAYMENT,
            player_id=player_id,
            details={
                "owner": due.owner_id,
                "position": due.position,
                "amount": due.amount,
                "paid": paid,
                "payer_balance": self.players[player_id].cash,
                "owner_balance": self.players[due.owner_id].cash,
            },
        )
        self._settle_turn()
        return paid

    def draw_chance(self, player_id: int) -> int:
        """Draw and apply a chance effect. Returns the signed amount drawn."""
        self._require(player_id, TurnPhase.AWAITING_CHANCE_EFFECT)
        amount = self.dice.chance_effect()
        cash_before = self.players[player_id].cash

        if amount >= 0:
            self.ledger.credit(player_id, amount)
            applied = amount
        else:
            applied = -self._settle_debt(player_id, -amount, None)

        self.event_log.log(
            EventType.CHANCE_EFFECT,
            player_id=player_id,
            details={
                "amount": amount,
                "applied": applied,
                "cash_before": cash_before,
                "cash_after": self.players[player_id].cash,
            },
        )
        self._settle_turn()
        return amount

    def leave_bank(self, player_id: int) -> None:
        """Finish a bank visit."""
        self._require(player_id, TurnPhase.AWAITING_BANK_VISIT)
        self._settle_turn()

    def buy_shares(self, player_id: int, district_id: str, count: int) -> int:
        """Buy stock before rolling or while visiting the bank."""
        self._require(player_id, TurnPhase.AWAITING_ROLL, TurnPhase.AWAITING_BANK_VISIT)
        return self.ledger.buy_shares(player_id, district_id, count)

    def sell_shares(self, player_id: int, district_id: str, count: int) -> int:
        """Sell stock before rolling, at the bank, or to raise cash for a fee."""
        self._require(
            player_id,
            TurnPhase.AWAITING_ROLL,
            TurnPhase.AWAITING_BANK_VISIT,
            TurnPhase.AWAITING_FEE_PAYMENT,
        )
        return self.ledger.sell_shares(player_id, district_id, count)

    # Bankruptcy

    def _settle_debt(self, payer_id: int, amount: int, creditor_id: Optional[int]) -> int:
        """
        Move `amount` from payer to creditor (None means the bank).

        When the payer cannot cover it, a bankruptcy event is raised and the
        consequence policy runs: liquidate all stock, retry the full debit,
        and otherwise pay whatever is left above the floor and mark the
        payer insolvent. Returns the amount actually paid.
        """
        if self.ledger.can_afford(payer_id, amount):
            self._transfer_cash(payer_id, amount, creditor_id)
            return amount

        payer = self.players[payer_id]
        self.event_log.log(
            EventType.BANKRUPTCY,
            player_id=payer_id,
            details={
                "creditor": creditor_id,
                "amount": amount,
                "available": self.ledger.available_cash(payer_id),
                "stage": "shortfall",
            },
        )
        self.ledger.liquidate(payer_id)

        if self.ledger.can_afford(payer_id, amount):
            self._transfer_cash(payer_id, amount, creditor_id)
            return amount

        paid = max(self.ledger.available_cash(payer_id), 0)
        self._transfer_cash(payer_id, paid, creditor_id)
        payer.is_bankrupt = True
        for position in self.ownership.shops_owned_by(payer_id):
            self.ownership.transfer(position, None)

        self.event_log.log(
            EventType.BANKRUPTCY,
            player_id=payer_id,
            details={
                "creditor": creditor_id,
                "amount": amount,
                "paid": paid,
                "stage": "insolvent",
            },
        )
        logger.info(f"Player {payer_id} is insolvent after paying {paid} of {amount}")
        return paid

    def _transfer_cash(self, payer_id: int, amount: int, creditor_id: Optional[int]) -> None:
        self.ledger.debit(payer_id, amount)
        if creditor_id is not None:
            self.ledger.credit(creditor_id, amount)

    # Turn advancement

    def _settle_turn(self) -> None:
        player = self.get_current_player()
        self.phase = TurnPhase.TURN_SETTLED
        self.pending = None
        self.event_log.log(
            EventType.TURN_SETTLED,
            player_id=player.player_id,
            details={"turn": self.turn_number, "cash": player.cash},
        )

        self.turn_number += 1
        self._advance_player_index()

        if self._should_end():
            self._end_game()
        else:
            self._start_turn()

    def _advance_player_index(self) -> None:
        count = len(self.players)
        for _ in range(count):
            self.current_player_index += 1
            if self.current_player_index >= count:
                self.current_player_index = 0
                self.round_number += 1
            if not self.get_current_player().is_bankrupt:
                return

    def _start_turn(self) -> None:
        player = self.get_current_player()
        self.phase = TurnPhase.AWAITING_ROLL
        self.pending = RollPrompt(player.player_id)
        self.last_roll = None
        self.event_log.log(
            EventType.TURN_START,
            player_id=player.player_id,
            details={"turn": self.turn_number, "round": self.round_number},
        )

    def _should_end(self) -> bool:
        if self.end_predicate is not None:
            return self.end_predicate(self)
        return self.default_end_condition()

    def default_end_condition(self) -> bool:
        """Bankruptcy, round limit, target net worth, or a single solvent player left."""
        active = self.get_active_players()
        if not active:
            return True
        if self.config.end_on_bankruptcy and len(active) < len(self.players):
            return True
        if len(self.players) > 1 and len(active) <= 1:
            return True
        if self.config.max_rounds is not None and self.round_number >= self.config.max_rounds:
            return True
        if self.config.target_net_worth is not None:
            return any(self.net_worth(p.player_id) >= self.config.target_net_worth for p in active)
        return False

    def _end_game(self) -> None:
        self.phase = TurnPhase.GAME_ENDED
        self.pending = None
        self.game_over = True

        standings = self.standings()
        self.winner = standings[0][0] if standings else None
        self.event_log.log(
            EventType.GAME_END,
            player_id=self.winner,
            details={
                "winner": self.winner,
                "net_worth": standings[0][1] if standings else None,
                "turns": self.turn_number,
                "rounds": self.round_number,
            },
        )
        logger.info(f"Game ended after {self.turn_number} turns, winner: {self.winner}")

    def standings(self) -> List[tuple]:
        """(player_id, net_worth) for solvent players, best first, ties to lowest id."""
        worth = [(p.player_id, self.net_worth(p.player_id)) for p in self.get_active_players()]
        return sorted(worth, key=lambda item: (-item[1], item[0]))


def create_game(
    config: GameConfig,
    players: List[Player],
    board: Optional[Board] = None,
    end_predicate: Optional[EndPredicate] = None,
) -> GameState:
    """
    Create a new game with the given configuration and players.

    Args:
        config: Game configuration
        players: List of players (ids should be 0..n-1)
        board: Board to play on (defaults to the standard loop)
        end_predicate: Optional replacement for the default end condition

    Returns:
        Initialized GameState
    """
    return GameState(config, players, board, end_predicate)
