import io
import random

import pytest

from ctxswitch.register_stack import RegisterStack
from ctxswitch.scheduler import (
    INITIAL_PC,
    ProcessState,
    Resources,
    Scheduler,
    execute_program,
    format_pcb,
    parse_instruction,
)


def _write_programs(directory, lines=20):
    for number in range(1, 5):
        text = "".join(f"mov v{i}\n" for i in range(lines))
        (directory / f"process{number}.txt").write_text(text, encoding="utf-8")


def _scheduler(tmp_path, seed=7, **kwargs):
    kwargs.setdefault("output", io.StringIO())
    return Scheduler(tmp_path, kwargs.pop("resources", Resources()), random.Random(seed), delay=0, **kwargs)


def test_format_pcb_matches_panel_layout():
    assert format_pcb(1, 1000, ProcessState.READY, None) == (
        "PID\t\t:1\nPC\t\t\t:1000\nState\t\t:Ready\nSP\t\t\t:(nil)\n"
    )


def test_parse_instruction():
    assert parse_instruction("mov a\n") == ("mov", "a")
    assert parse_instruction("halt") == ("halt", None)
    with pytest.raises(ValueError):
        parse_instruction("   \n")


def test_execute_program_push_and_pop(tmp_path):
    program = tmp_path / "p.txt"
    program.write_text("mov a\nadd b\nmov c\n", encoding="utf-8")
    stack = RegisterStack()
    assert execute_program(program, 3, stack) == 3
    assert stack.top() == "c"
    assert len(stack) == 1


def test_execute_program_limits_lines(tmp_path):
    program = tmp_path / "p.txt"
    program.write_text("mov a\nmov b\n", encoding="utf-8")
    stack = RegisterStack()
    assert execute_program(program, 1, stack) == 1
    assert stack.top() == "a"


def test_execute_program_missing_file(tmp_path):
    stack = RegisterStack()
    assert execute_program(tmp_path / "absent.txt", 4, stack) == 0
    assert len(stack) == 0


def test_resources_toggle():
    resources = Resources()
    resources.occupy(2)
    assert resources.is_busy(2)
    resources.release(2)
    assert not resources.is_busy(2)
    with pytest.raises(IndexError):
        resources.occupy(4)


def test_process_setup_invariants(tmp_path):
    scheduler = _scheduler(tmp_path)
    processes = scheduler.processes
    assert [p.pid for p in processes] == [0, 1, 2, 3]
    assert processes[0].pc == INITIAL_PC
    for previous, current in zip(processes, processes[1:]):
        assert current.pc == previous.pc + previous.burst_time
    for pcb in processes:
        assert pcb.burst_time % 2 == 0
        assert 4 <= pcb.burst_time <= 14
        assert pcb.state is ProcessState.READY


def test_same_seed_same_bursts(tmp_path):
    first = _scheduler(tmp_path, seed=11)
    second = _scheduler(tmp_path, seed=11)
    assert [p.burst_time for p in first.processes] == [p.burst_time for p in second.processes]


def test_run_completes_every_process(tmp_path):
    _write_programs(tmp_path)
    scheduler = _scheduler(tmp_path)
    starts = {p.pid: p.pc for p in scheduler.processes}
    completed = scheduler.run()
    assert sorted(completed) == [0, 1, 2, 3]
    for pcb in scheduler.processes:
        assert pcb.state is ProcessState.ENDED
        assert pcb.executed == pcb.burst_time
        assert pcb.pc == starts[pcb.pid] + pcb.burst_time
        assert pcb.stack.top() == f"v{pcb.burst_time - 1}"
        assert pcb.sp is pcb.stack.pointer()


def test_callbacks_see_running_then_ready(tmp_path):
    _write_programs(tmp_path)
    seen = []
    scheduler = _scheduler(
        tmp_path,
        on_before=lambda pcb: seen.append(("before", pcb.state)),
        on_after=lambda pcb: seen.append(("after", pcb.state)),
    )
    scheduler.run()
    total_slices = sum(p.burst_time for p in scheduler.processes) // 2
    assert len(seen) == 2 * total_slices
    assert all(state is ProcessState.RUNNING for kind, state in seen if kind == "before")
    assert all(state is ProcessState.READY for kind, state in seen if kind == "after")


def test_blocked_process_waits_for_release(tmp_path):
    _write_programs(tmp_path)
    resources = Resources()
    resources.occupy(1)
    calls = []

    def before(pcb):
        calls.append(pcb.pid)
        assert pcb.pid != 1 or not resources.is_busy(1)
        if len(calls) == 2:
            resources.release(1)

    output = io.StringIO()
    scheduler = _scheduler(tmp_path, resources=resources, output=output, on_before=before)
    completed = scheduler.run()
    text = output.getvalue()
    assert "process 1 is blocked" in text
    assert sorted(completed) == [0, 1, 2, 3]
    assert calls.index(1) > 1


def test_describe_lists_every_process(tmp_path):
    scheduler = _scheduler(tmp_path)
    lines = scheduler.describe().splitlines()
    assert lines[0] == "process\tArrival time\t burst time\tPC\tSize"
    assert len(lines) == 5


def test_invalid_quantum(tmp_path):
    with pytest.raises(ValueError):
        Scheduler(tmp_path, quantum=0)