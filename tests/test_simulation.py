import random

import pytest

from pixeldino.core.character import Character, CharacterMeta
from pixeldino.core.physics import Position, Velocity
from pixeldino.game.allocators import build_allocators
from pixeldino.game.simulation import (
    AllocatorGroups,
    GameRules,
    GameState,
    advance,
    check_collision,
)

BLOCK = ((1, 1), (1, 1))


@pytest.fixture
def rules(game_settings) -> GameRules:
    return GameRules.from_settings(game_settings)


@pytest.fixture
def state(rules) -> GameState:
    return GameState.fresh(rules)


@pytest.fixture
def no_allocators() -> AllocatorGroups:
    return AllocatorGroups()


def obstacle(row, col, velocity=(0, 0), layout=BLOCK) -> Character:
    return Character(CharacterMeta((layout,), 0, Position(row, col), Velocity(*velocity)))


class TestGameRules:
    def test_wide_canvas_uses_configured_speed(self, game_settings):
        rules = GameRules.from_settings(game_settings, 1000)
        assert rules.floor_velocity.get() == (0, -7)
        assert rules.cactus_min_gap == 20

    def test_narrow_canvas_slows_down_and_spaces_cacti(self, game_settings):
        rules = GameRules.from_settings(game_settings, 600)
        assert rules.floor_velocity.get() == (0, -5)
        assert rules.cactus_min_gap == 50

    def test_rejects_empty_canvas(self, game_settings):
        with pytest.raises(ValueError):
            GameRules.from_settings(game_settings, 0)


class TestFreshState:
    def test_player_alone_on_floor(self, state, rules):
        assert state.harmful == [state.player]
        assert state.harmless == []
        assert state.player.get_position().get() == rules.floor_position.get()
        assert state.score == 0
        assert state.ready_to_jump

    def test_player_position_is_not_shared_with_rules(self, state, rules):
        state.player.get_position().add(Velocity(-50, 0))
        assert rules.floor_position.get() == (200, 20)


class TestScore:
    def test_fraction_overflows_into_score(self, state, rules, no_allocators):
        for _ in range(7):
            advance(state, no_allocators, rules)
        # 7 * 0.15 = 1.05
        assert state.score == 1
        assert state.score_fraction == pytest.approx(0.05)

    def test_score_after_many_ticks(self, state, rules, no_allocators):
        for _ in range(70):
            advance(state, no_allocators, rules)
        assert state.score == 10


class TestSpeedup:
    def test_applied_once_per_boundary(self, state, rules, no_allocators):
        state.score = 99
        state.score_fraction = 0.95
        rock = obstacle(0, 500, velocity=(0, -7))
        state.harmless.append(rock)

        report = advance(state, no_allocators, rules)
        assert state.score == 100
        assert report.speedup_applied
        assert state.cumulative_velocity.get() == pytest.approx((0, -0.1))
        assert rock.get_velocity().get() == pytest.approx((0, -7.1))

        # Score stays at 100 for a few ticks: no further speed-up
        for _ in range(5):
            assert not advance(state, no_allocators, rules).speedup_applied
        assert state.cumulative_velocity.get() == pytest.approx((0, -0.1))

    def test_not_applied_at_zero(self, state, rules, no_allocators):
        assert not advance(state, no_allocators, rules).speedup_applied
        assert state.cumulative_velocity.get() == (0, 0)

    def test_player_velocity_untouched(self, state, rules, no_allocators):
        state.score = 199
        state.score_fraction = 0.95
        advance(state, no_allocators, rules)
        assert state.player.get_velocity().get() == (0, 0)

    def test_ratchet_never_decreases(self, state, rules, no_allocators):
        history = []
        state.score = 95
        for _ in range(2000):
            advance(state, no_allocators, rules)
            history.append(state.cumulative_velocity.col)
        assert all(b <= a for a, b in zip(history, history[1:]))
        assert history[-1] < 0

    def test_newcomers_get_cumulative_velocity(self, state, rules):
        allocators = build_allocators(rules, random.Random(3))
        state.cumulative_velocity = Velocity(0, -0.3)
        spawned = 0
        for _ in range(200):
            spawned += advance(state, allocators, rules).spawned
        assert spawned > 0
        # floor, bird, cloud and star speeds shifted by the ratchet
        expected = [-7.3, -8.3, -1.3, -0.6]
        for character in state.harmless + state.obstacles:
            col = character.get_velocity().col
            assert any(col == pytest.approx(e) for e in expected)


class TestEviction:
    def test_boundary_column_is_kept(self, state, rules, no_allocators):
        keep = obstacle(0, -150 + 1, velocity=(0, -1))
        state.harmless.append(keep)
        advance(state, no_allocators, rules)
        assert keep.get_position().col == -150
        assert keep in state.harmless

    def test_one_past_boundary_is_evicted(self, state, rules, no_allocators):
        gone = obstacle(0, -150, velocity=(0, -1))
        state.harmful.append(gone)
        report = advance(state, no_allocators, rules)
        assert gone not in state.harmful
        assert report.evicted == 1

    def test_player_is_never_evicted(self, state, rules, no_allocators):
        state.player.set_position(Position(200, -500))
        advance(state, no_allocators, rules)
        assert state.harmful[0] is state.player


class TestGravity:
    def test_jump_arc_lands_on_floor(self, state, rules, no_allocators):
        state.player_velocity = rules.jump_impulse.clone()
        state.ready_to_jump = False

        advance(state, no_allocators, rules)
        assert state.player.get_position().row < rules.floor_position.row
        assert not state.ready_to_jump

        peak = state.player.get_position().row
        for _ in range(100):
            advance(state, no_allocators, rules)
            row = state.player.get_position().row
            assert row <= rules.floor_position.row
            peak = min(peak, row)
            if state.ready_to_jump:
                break

        assert state.ready_to_jump
        assert state.player.get_position().get() == rules.floor_position.get()
        assert state.player_velocity.get() == (0, 0)
        assert peak < rules.floor_position.row - 80

    def test_grounded_player_stays_on_floor(self, state, rules, no_allocators):
        for _ in range(10):
            advance(state, no_allocators, rules)
        assert state.player.get_position().get() == rules.floor_position.get()
        assert state.ready_to_jump


class TestCollision:
    def test_overlapping_obstacle_reported(self, state, rules, no_allocators):
        state.harmful.append(obstacle(200, 22))
        assert advance(state, no_allocators, rules).collided

    def test_player_never_collides_with_itself(self, state, rules, no_allocators):
        assert check_collision(state) is None
        assert not advance(state, no_allocators, rules).collided

    def test_harmless_characters_never_collide(self, state, rules, no_allocators):
        state.harmless.append(obstacle(200, 22))
        assert not advance(state, no_allocators, rules).collided

    def test_distant_obstacle_ignored(self, state, rules, no_allocators):
        state.harmful.append(obstacle(200, 600))
        assert not advance(state, no_allocators, rules).collided


class TestAllocatorTables:
    def test_birds_hold_their_first_frame(self, rules):
        birds = build_allocators(rules, random.Random(0)).harmful[1]
        metas = [meta for meta, _ in birds._characters.entries]

        assert [meta.position.row for meta in metas] == [170, 190]
        assert all(meta.frame_interval == 0 for meta in metas)

        bird = Character(metas[0])
        first = bird.get_layout()
        for _ in range(50):
            bird.tick()
        assert bird.get_layout() is first

    def test_every_table_enters_at_right_edge(self, game_settings):
        rules = GameRules.from_settings(game_settings, 640)
        groups = build_allocators(rules, random.Random(0))
        for allocator in groups.harmless + groups.harmful:
            for meta, _ in allocator._characters.entries:
                assert meta.position.col == 640
