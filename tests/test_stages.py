from conftest import RESCUE_ROUTE, finish_round, play_phase, reach_stage_after_training

from tiny_thinkers import cues
from tiny_thinkers.config import (
    CELEBRATION_SPEECH_DELAY,
    HELP_BARK_DELAY,
    HOME_COMPLETE_DELAY,
    MAZE_HINT_DELAY,
    NEXT_PHASE_DELAY,
    PHASE_WRAPUP_DELAY,
    STAGE_SPEECH_DELAY,
)
from tiny_thinkers.content import Phase, find_character
from tiny_thinkers.maze import MoveResult
from tiny_thinkers.rounds import AnswerResult
from tiny_thinkers.stages import GameProgress, Stage, StageMachine


def solve_maze(machine):
    for step in RESCUE_ROUTE:
        machine.move(step)
    machine.update(HOME_COMPLETE_DELAY)


def test_starts_at_intro(machine):
    assert machine.stage is Stage.INTRO
    assert machine.progress == GameProgress()
    assert machine.round_index == 0


def test_skip_intro_starts_at_character_select(audio, scheduler, rng):
    machine = StageMachine(audio=audio, scheduler=scheduler, rng=rng, skip_intro=True)
    assert machine.stage is Stage.CHARACTER_SELECT


def test_character_selection_prefills_name(machine, audio):
    assert machine.acknowledge_intro()
    assert machine.stage is Stage.CHARACTER_SELECT
    assert not machine.acknowledge_intro()

    assert not machine.select_character("kraken")
    assert machine.stage is Stage.CHARACTER_SELECT

    assert machine.select_character("dragon")
    assert machine.stage is Stage.NAMING
    assert machine.character == find_character("dragon")
    assert machine.friend_name == "Flame"

    machine.update(STAGE_SPEECH_DELAY)
    assert "Flame" in audio.spoken[-1]


def test_blank_name_is_rejected(machine):
    machine.acknowledge_intro()
    machine.select_character("cat")
    assert machine.set_name("   ")
    assert not machine.can_confirm_name
    assert not machine.confirm_name()
    assert machine.stage is Stage.NAMING


def test_name_is_trimmed_and_starts_sight_training(machine, audio):
    machine.acknowledge_intro()
    machine.select_character("cat")
    assert machine.confirm_name("  Zed  ")
    assert machine.friend_name == "Zed"
    assert machine.stage is Stage.SIGHT_GAME
    assert machine.phase is Phase.SIGHT
    assert machine.round_engine.total_rounds == 3

    machine.update(STAGE_SPEECH_DELAY)
    assert "Zed" in audio.spoken[-1]


def test_sight_hands_over_to_hearing_after_pause(machine):
    machine.acknowledge_intro()
    machine.select_character("robot")
    machine.confirm_name()

    finish_round(machine)
    finish_round(machine)
    assert machine.round_index == 2
    assert not machine.progress.sight

    finish_round(machine)
    assert machine.progress.sight
    assert machine.stage is Stage.SIGHT_GAME

    machine.update(PHASE_WRAPUP_DELAY)
    assert machine.stage is Stage.SIGHT_GAME
    assert "Robo can now see" in machine.audio.spoken[-1]

    machine.update(NEXT_PHASE_DELAY - 0.5)
    assert machine.stage is Stage.SIGHT_GAME
    machine.update(0.5)
    assert machine.stage is Stage.HEARING_GAME
    assert machine.round_index == 0
    assert not machine.progress.hearing


def test_hearing_can_replay_sounds(machine, audio):
    machine.acknowledge_intro()
    machine.select_character("owl")
    machine.confirm_name()
    assert not machine.replay_sound()
    play_phase(machine)

    assert machine.stage is Stage.HEARING_GAME
    assert machine.replay_sound()
    assert audio.played[-1] == machine.round_engine.current_item.sound_key


def test_thinking_leads_straight_to_journey_complete(machine):
    reach_stage_after_training(machine)
    assert machine.stage is Stage.JOURNEY_COMPLETE
    assert machine.progress == GameProgress(True, True, True)


def test_dog_help_barks_and_leads_to_maze(machine, audio):
    reach_stage_after_training(machine)
    audio.played.clear()

    assert machine.continue_journey()
    assert machine.stage is Stage.DOG_HELP
    assert audio.played == [cues.CLICK, cues.DOG_BARKING]
    machine.update(HELP_BARK_DELAY)
    assert audio.played.count(cues.DOG_BARKING) == 2

    assert machine.start_rescue()
    assert machine.stage is Stage.MAZE_GAME
    assert machine.maze.position == (0, 0)
    assert not machine.show_hint
    machine.update(MAZE_HINT_DELAY)
    assert machine.show_hint
    # dog-help timers were dropped on the way out
    assert audio.played.count(cues.DOG_BARKING) == 2


def test_maze_win_reaches_final_celebration_once(machine, audio):
    reach_stage_after_training(machine)
    machine.continue_journey()
    machine.start_rescue()

    solve_maze(machine)
    assert machine.stage is Stage.FINAL_CELEBRATION
    celebrations = audio.played.count(cues.CELEBRATION)

    assert not machine.complete_maze()
    assert machine.move("left") is MoveResult.IGNORED
    assert audio.played.count(cues.CELEBRATION) == celebrations

    machine.update(CELEBRATION_SPEECH_DELAY)
    assert "Mission accomplished" in audio.spoken[-1]


def test_complete_maze_needs_a_solved_maze(machine):
    reach_stage_after_training(machine)
    machine.continue_journey()
    machine.start_rescue()
    assert not machine.complete_maze()
    assert machine.stage is Stage.MAZE_GAME


def test_restart_resets_everything(machine, scheduler):
    reach_stage_after_training(machine, character="unicorn", name="Sunny")
    machine.continue_journey()
    machine.start_rescue()
    solve_maze(machine)

    assert machine.restart()
    assert machine.stage is Stage.CHARACTER_SELECT
    assert machine.character is None
    assert machine.friend_name == ""
    assert machine.progress == GameProgress()
    assert machine.round_index == 0
    assert machine.maze is None
    assert not machine.show_hint
    # only the welcome-back line is left
    assert scheduler.pending() == 1

    machine.select_character("cat")
    assert machine.friend_name == "Whiskers"
    machine.confirm_name()
    assert machine.stage is Stage.SIGHT_GAME
    assert not machine.progress.sight


def test_restart_only_from_final_celebration(machine):
    assert not machine.restart()
    machine.acknowledge_intro()
    assert not machine.restart()
    assert machine.stage is Stage.CHARACTER_SELECT


def test_actions_outside_their_stage_are_ignored(machine):
    assert machine.answer("apple") is AnswerResult.IGNORED
    assert machine.move("right") is MoveResult.IGNORED
    assert not machine.select_character("cat")
    assert not machine.confirm_name("Zed")
    assert not machine.continue_journey()
    assert not machine.start_rescue()
    assert machine.stage is Stage.INTRO


def test_phase_timers_do_not_leak_into_next_phase(machine, scheduler):
    machine.acknowledge_intro()
    machine.select_character("dog")
    machine.confirm_name()
    play_phase(machine)

    assert machine.stage is Stage.HEARING_GAME
    assert scheduler.pending(Stage.SIGHT_GAME.value) == 0


def test_each_phase_draws_a_fresh_engine(machine):
    machine.acknowledge_intro()
    machine.select_character("dog")
    machine.confirm_name()
    sight_engine = machine.round_engine
    play_phase(machine)
    assert machine.round_engine is not sight_engine
    assert machine.round_engine.phase is Phase.HEARING


def test_toggle_mute(machine, audio):
    assert machine.toggle_mute()
    machine.acknowledge_intro()
    assert audio.played == []
    assert not machine.toggle_mute()
