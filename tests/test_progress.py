import queue

from levelgen.dungeon.pipeline import STEPS
from levelgen.dungeon.progress import MultiStepProgress, StepProgress, send_progress


def test_not_started():
    progress = MultiStepProgress(STEPS)
    assert progress.get_current_step() is None
    assert progress.get_current_step_number() is None
    assert progress.get_progress_percentage() == 0
    assert not progress.is_done()
    assert progress.snapshot() == StepProgress("", 0, 6)


def test_walks_every_step_then_refuses():
    progress = MultiStepProgress(STEPS)
    numbers = []
    while progress.next_step():
        numbers.append(progress.get_current_step_number())
    assert numbers == [1, 2, 3, 4, 5, 6]
    assert progress.is_done()
    assert progress.get_progress_percentage() == 96
    assert not progress.next_step()
    assert progress.get_current_step().id == "complete"


def test_empty_step_list_never_starts():
    progress = MultiStepProgress([])
    assert not progress.next_step()
    assert not progress.is_done()


def test_send_to_queue():
    q = queue.Queue()
    assert send_progress(q, StepProgress("build_map", 1, 6))
    assert q.get_nowait().to_dict() == {"step_name": "build_map", "current_step": 1, "step_count": 6}


def test_send_to_callable_and_none():
    seen = []
    assert send_progress(seen.append, StepProgress("render_rooms", 3, 6))
    assert seen[0].current_step == 3
    assert not send_progress(None, StepProgress("render_rooms", 3, 6))


def test_failing_receiver_is_ignored():
    def closed(_progress):
        raise BrokenPipeError("receiver gone")

    full = queue.Queue(maxsize=1)
    full.put_nowait("occupied")
    assert not send_progress(closed, StepProgress("complete", 6, 6))
    assert not send_progress(full, StepProgress("complete", 6, 6))


def test_step_progress_done_flag():
    assert StepProgress("complete", 6, 6).is_done()
    assert not StepProgress("connect_rooms", 5, 6).is_done()
