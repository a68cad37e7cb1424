"""
Integration tests for a full game session.

Drives the Game controller through the renderer's listener registry the
way an interactive adapter would.
"""
import io
import json
import random

import pytest

from skirmish.core.config import GameConfig
from skirmish.core.data import CharacterClass, Severity, TurnPhase
from skirmish.core.events import EventType
from skirmish.core.renderer import InputEventType
from skirmish.core.state_service import MemoryStateService
from skirmish.game.entities.character import MAX_HEALTH
from skirmish.game.game import Game
from skirmish.renderers.ascii_renderer import AsciiRenderer


@pytest.fixture
def storage():
    return MemoryStateService()


@pytest.fixture
def game(renderer, storage, event_manager):
    game = Game(renderer, storage, config=GameConfig(), event_manager=event_manager,
                rng=random.Random(7))
    game.init()
    return game


class HeldFeedbackRenderer(AsciiRenderer):
    """Keeps damage feedback pending until the test finishes it."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.pending = []

    def animate_damage(self, index, amount, on_complete):
        self.pending.append(on_complete)


def legal_targets(game, position):
    """Cells the unit at ``position`` could act on, attacks first."""
    game.turn_manager.select_cell(position)
    attacks, steps = [], []
    for cell in range(game.board.cell_count):
        result = game.turn_manager.hover(cell)
        if result.can_attack:
            attacks.append(cell)
        elif result.can_step:
            steps.append(cell)
    return attacks, steps


class TestSession:

    def test_init(self, game, renderer):
        assert renderer.has_cell_listeners()
        assert len(game.state.teams.player_units) == 2
        assert len(game.state.teams.npc_units) == 2
        assert renderer.score == (1, 0, 0)
        assert renderer.cells.keys() == {e.position for e in game.state.teams}

    def test_missing_config_is_logged(self, game):
        assert any("No configuration file" in m.text for m in game.log_manager.messages)

    def test_click_selects_then_acts(self, game, renderer):
        unit = game.state.teams.player_units[0]

        renderer.click_cell(unit.position)
        assert game.state.selected_position == unit.position

        attacks, steps = legal_targets(game, unit.position)
        renderer.click_cell((attacks or steps)[0])

        assert game.state.player_turn is True or game.state.is_over
        assert renderer.has_cell_listeners() or game.state.is_over

    def test_hover_through_listeners(self, game, renderer):
        unit = game.state.teams.player_units[0]
        renderer.click_cell(unit.position)
        _, steps = legal_targets(game, unit.position)

        renderer.enter_cell(steps[0])
        assert game.state.phase == TurnPhase.ACTION_PENDING

        renderer.leave_cell(steps[0])
        assert game.state.phase == TurnPhase.SELECTED


class TestPersistence:

    def test_save_and_load(self, game, renderer, storage, event_manager):
        loaded_events = []
        event_manager.subscribe(EventType.GAME_LOADED, loaded_events.append)
        saved = game.state

        renderer.dispatch_action(InputEventType.SAVE_GAME)
        unit = saved.teams.player_units[0]
        renderer.click_cell(unit.position)
        _, steps = legal_targets(game, unit.position)
        renderer.click_cell(steps[0])
        renderer.dispatch_action(InputEventType.LOAD_GAME)

        assert game.state.teams == saved.teams
        assert game.state.current_level == saved.current_level
        assert game.state.selected_position is None
        assert renderer.tooltips[-1] == ("Information", "Game loaded", Severity.INFO)
        assert loaded_events[0].character_count == 4
        assert renderer.has_cell_listeners()

    def test_snapshot_is_json(self, game, renderer, storage):
        renderer.dispatch_action(InputEventType.SAVE_GAME)

        data = json.loads(storage.text)

        assert set(data) == {"current_level", "teams", "number_of_points", "player_turn", "phase"}
        assert {"class_tag", "level", "attack", "defence", "health", "is_player"} <= set(
            data["teams"][0]["character"]
        )

    def test_load_without_save(self, game, renderer):
        before = game.state

        renderer.dispatch_action(InputEventType.LOAD_GAME)

        assert game.state is before
        assert renderer.tooltips[-1][2] == Severity.DANGER

    @pytest.mark.parametrize("text", [
        "{not json",
        '{"current_level": 1}',
        '{"current_level": 1, "number_of_points": 0, "player_turn": true, '
        '"teams": [{"position": 99, "character": {"class_tag": "bowman", "level": 1, '
        '"attack": 25, "defence": 25, "health": 50, "is_player": true}}]}',
        '{"current_level": 1, "number_of_points": 0, "player_turn": true, '
        '"teams": [{"position": 3, "character": {"class_tag": "wizard", "level": 1, '
        '"attack": 25, "defence": 25, "health": 50, "is_player": true}}]}',
        '{"current_level": 9, "number_of_points": 0, "player_turn": true, "teams": []}',
        '{"current_level": 0, "number_of_points": 0, "player_turn": true, "teams": []}',
        '{"current_level": 1, "number_of_points": 0, "player_turn": "false", "teams": []}',
        '{"current_level": 1, "number_of_points": 0, "player_turn": true, "teams": [], '
        '"phase": "ACTION_PENDING"}',
    ])
    def test_corrupt_snapshot_keeps_state(self, renderer, event_manager, text):
        game = Game(renderer, MemoryStateService(text), config=GameConfig(),
                    event_manager=event_manager, rng=random.Random(7))
        game.init()
        before = game.state

        renderer.dispatch_action(InputEventType.LOAD_GAME)

        assert game.state is before
        assert renderer.tooltips[-1][2] == Severity.DANGER
        assert any(m.text.startswith("Load failed") for m in game.log_manager.messages)

    def test_load_during_opponent_turn_resumes(self, game, renderer, storage, make_unit, make_state):
        snapshot = make_state(
            make_unit(CharacterClass.SWORDSMAN, 0),
            make_unit(CharacterClass.DAEMON, 63),
            player_turn=False,
        ).to_snapshot()
        storage.save(snapshot)

        renderer.dispatch_action(InputEventType.LOAD_GAME)

        assert game.state.player_turn is True
        assert game.state.teams.find(63) is None


class TestNewGame:

    def test_new_game_keeps_record(self, game, renderer):
        game.turn_manager.reset(game.state.evolve(number_of_points=90, record=150, current_level=3))

        renderer.dispatch_action(InputEventType.NEW_GAME)

        assert game.state.current_level == 1
        assert game.state.number_of_points == 0
        assert game.state.record == 150
        assert renderer.score == (1, 0, 150)
        assert renderer.tooltips[-1] == ("Information", "A new game has begun", Severity.INFO)


class TestPlaythrough:

    def test_seeded_playthrough_keeps_invariants(self, renderer, event_manager):
        rng = random.Random(2024)
        game = Game(renderer, MemoryStateService(), config=GameConfig(), event_manager=event_manager,
                    rng=random.Random(99))
        game.init()
        best = 0

        for _ in range(400):
            state = game.state
            if state.is_over:
                break

            options = []
            for unit in state.teams.player_units:
                attacks, steps = legal_targets(game, unit.position)
                if attacks or steps:
                    options.append((unit.position, attacks, steps))
            assert options, "player faction has no legal action"

            position, attacks, steps = rng.choice(options)
            renderer.click_cell(position)
            renderer.click_cell(rng.choice(attacks) if attacks else rng.choice(steps))

            state = game.state
            positions = [e.position for e in state.teams]
            assert len(positions) == len(set(positions))
            assert all(0 <= p < game.board.cell_count for p in positions)
            assert all(0 < e.character.health <= MAX_HEALTH for e in state.teams)
            assert 1 <= state.current_level <= game.config.max_level
            assert state.number_of_points >= best
            assert state.record >= state.number_of_points
            best = state.number_of_points
            if not state.is_over:
                assert state.player_turn is True
                assert state.teams.player_units and state.teams.npc_units

        if game.state.is_over:
            assert game.state.phase in (TurnPhase.PLAYER_WON, TurnPhase.PLAYER_LOST)
            assert not renderer.has_cell_listeners()


class TestLifecycle:

    @pytest.fixture
    def held(self, storage, event_manager):
        renderer = HeldFeedbackRenderer(output=io.StringIO())
        game = Game(renderer, storage, config=GameConfig(), event_manager=event_manager,
                    rng=random.Random(7))
        game.init()
        return game, renderer

    @staticmethod
    def attack_pending(game, renderer, make_unit, make_state):
        """Swordsman at 0 hits the Vampire at 1; the feedback stays pending."""
        game.turn_manager.reset(make_state(
            make_unit(CharacterClass.SWORDSMAN, 0),
            make_unit(CharacterClass.VAMPIRE, 1),
            make_unit(CharacterClass.DAEMON, 63),
        ))
        renderer.click_cell(0)
        renderer.click_cell(1)
        assert game.turn_manager.input_locked
        return renderer.pending.pop()

    def test_new_game_while_feedback_pending(self, held, make_unit, make_state):
        game, renderer = held
        stale = self.attack_pending(game, renderer, make_unit, make_state)

        renderer.dispatch_action(InputEventType.NEW_GAME)
        fresh = game.state
        stale()

        assert game.state is fresh
        assert game.state.player_turn is True
        assert game.state.phase == TurnPhase.IDLE
        assert not game.turn_manager.input_locked
        assert renderer.has_cell_listeners()

    def test_load_while_feedback_pending(self, held, storage, make_unit, make_state):
        game, renderer = held
        renderer.dispatch_action(InputEventType.SAVE_GAME)
        saved = game.state
        stale = self.attack_pending(game, renderer, make_unit, make_state)

        renderer.dispatch_action(InputEventType.LOAD_GAME)
        stale()

        assert game.state.teams == saved.teams
        assert game.state.player_turn is True
        assert not game.turn_manager.input_locked

    def test_won_game_round_trip(self, game, renderer, make_unit, make_state):
        game.turn_manager.reset(make_state(
            make_unit(CharacterClass.SWORDSMAN, 0),
            make_unit(CharacterClass.VAMPIRE, 1, health=3),
            current_level=4,
            number_of_points=100,
        ))
        renderer.click_cell(0)
        renderer.click_cell(1)
        assert game.state.phase == TurnPhase.PLAYER_WON
        assert game.state.number_of_points == 150

        renderer.dispatch_action(InputEventType.SAVE_GAME)
        renderer.dispatch_action(InputEventType.LOAD_GAME)

        assert game.state.phase == TurnPhase.PLAYER_WON
        assert game.state.number_of_points == 150
        assert game.state.record == 150
        assert game.state.current_level == 4
        assert renderer.banner == "You Won!"
        assert not renderer.has_cell_listeners()

    def test_lost_game_round_trip(self, game, renderer, make_unit, make_state):
        game.turn_manager.reset(make_state(
            make_unit(CharacterClass.MAGICIAN, 0, health=2),
            make_unit(CharacterClass.UNDEAD, 9),
        ))
        renderer.click_cell(0)
        renderer.click_cell(1)
        assert game.state.phase == TurnPhase.PLAYER_LOST

        renderer.dispatch_action(InputEventType.SAVE_GAME)
        renderer.banner = None
        renderer.dispatch_action(InputEventType.LOAD_GAME)

        assert game.state.phase == TurnPhase.PLAYER_LOST
        assert renderer.banner == "You Lose!"
        assert not renderer.has_cell_listeners()

    def test_load_cleared_level_saved_before_progression(self, game, storage, make_unit, make_state):
        storage.save(make_state(make_unit(CharacterClass.SWORDSMAN, 0, health=60)).to_snapshot())

        game.on_load_game()

        assert game.state.current_level == 2
        assert game.state.number_of_points == 60
        assert game.state.player_turn is True
