"""Orchestration of communication from the shell to the rules engine and the match log (and the reverse direction)."""

import logging
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from src.api.models import (
    AbandonGameRequest,
    GameResponse,
    GetGameRequest,
    IntentRequest,
    IntentResponse,
    NewGameRequest,
    ScoreboardResponse,
)
from src.core.config import RulesConfig
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Player
from src.db.repository import GameRecordRepository
from src.ironclad.game import Applied, EngineResponse, GameOver, Rejected, TurnController

logger = logging.getLogger(__name__)

PASS_INTENT = "pass"


@dataclass
class ActiveGame:
    """A game in progress, kept in memory until it ends"""

    controller: TurnController
    starting_notation: str
    intents: list[str] = field(default_factory=list)


class IroncladService:
    """Orchestration of layers for Ironclad games."""

    def __init__(self, repository: GameRecordRepository, rules: RulesConfig) -> None:
        self.repo = repository
        self.rules = rules
        self._games: dict[UUID, ActiveGame] = {}

    # -- Shell facing logic ---
    def start_game(self, request: NewGameRequest) -> GameResponse:
        """Set up a new game, from the configured layout unless the request brings its own."""
        if request.starting_notation:
            controller = TurnController.from_notation(request.starting_notation, self.rules)
        else:
            controller = TurnController.new_game(self.rules)

        game_id = uuid4()
        self._games[game_id] = ActiveGame(controller, controller.snapshot())
        logger.info("Started game %s", game_id)
        return self._create_game_response(game_id, self._games[game_id])

    def get_game(self, request: GetGameRequest) -> GameResponse:
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_intents(self, request: GetGameRequest) -> list[str]:
        game = self._fetch_game(request.game_id)
        return [move.to_intent() for move in game.controller.legal_moves()]

    def submit_intent(self, request: IntentRequest) -> IntentResponse:
        """Forward the intent to the game. A finished game is written to the match log and dropped."""
        game = self._fetch_game(request.game_id)
        response = game.controller.submit_intent(request.intent)

        match response:
            case Applied(delta=delta):
                game.intents.append(delta.move.to_intent() if delta.move else PASS_INTENT)
            case GameOver(delta=delta):
                if delta.move:
                    game.intents.append(delta.move.to_intent())
                self._record(request.game_id, game)

        return self._create_intent_response(request.game_id, game, response)

    def abandon_game(self, request: AbandonGameRequest) -> GameResponse:
        game = self._fetch_game(request.game_id)
        game.controller.abandon()
        self._record(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def history(self) -> list[GameModel]:
        return self.repo.list_records()

    def scoreboard(self) -> ScoreboardResponse:
        """Tally the results of all games recorded this session"""
        records = self.repo.list_records()
        wins = {player: sum(1 for record in records if record.winner == player) for player in Player}
        return ScoreboardResponse(
            games_played=len(records),
            wins=wins,
            draws=len(records) - sum(wins.values()),
        )

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID) -> ActiveGame:
        """Attempt to find the running game and raise error if it fails."""
        game = self._games.get(game_id)
        if game is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game

    def _record(self, game_id: UUID, game: ActiveGame) -> None:
        """Move a finished game from memory into the match log"""
        self.repo.create_record(self._to_model(game))
        del self._games[game_id]

    def _to_model(self, game: ActiveGame) -> GameModel:
        state = game.controller.state
        return GameModel(
            starting_layout=game.starting_notation,
            current_layout=game.controller.snapshot(),
            intents=list(game.intents),
            status=state.status,
            winner=state.winner,
        )

    def _create_game_response(self, game_id: UUID, game: ActiveGame) -> GameResponse:
        state = game.controller.state
        return GameResponse(
            game_id=game_id,
            notation=game.controller.snapshot(),
            starting_notation=game.starting_notation,
            active_player=state.active,
            turn=state.turn,
            status=state.status,
            winner=state.winner,
            intent_history=list(game.intents),
        )

    def _create_intent_response(self, game_id: UUID, game: ActiveGame, response: EngineResponse) -> IntentResponse:
        """Flatten the engine response into a single response model"""
        state = game.controller.state
        common = {"game_id": game_id, "notation": game.controller.snapshot(), "status": state.status}

        match response:
            case Rejected(rejection=rejection):
                return IntentResponse(
                    outcome="rejected",
                    rejection_reason=rejection.reason,
                    detail=rejection.detail,
                    **common,
                )
            case Applied(delta=delta, next_player=next_player):
                return IntentResponse(
                    outcome="applied",
                    cells_touched=[str(coord) for coord in delta.cells_touched],
                    removed=[piece.to_notation() for piece in delta.removed],
                    next_player=next_player,
                    **common,
                )
            case GameOver(winner=winner, delta=delta):
                return IntentResponse(
                    outcome="game_over",
                    cells_touched=[str(coord) for coord in delta.cells_touched],
                    removed=[piece.to_notation() for piece in delta.removed],
                    winner=winner,
                    **common,
                )
        raise TypeError(f"Unexpected engine response {response!r}")
