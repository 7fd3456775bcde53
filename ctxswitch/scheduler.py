"""Round-robin scheduling of simulated processes with context switches."""

from __future__ import annotations

import itertools
import random
import sys
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TextIO

from ctxswitch.circular_queue import CircularQueue
from ctxswitch.register_stack import RegisterStack, StackEntry

PROCESS_COUNT = 4
INITIAL_PC = 1000
BURST_LOW = 2
BURST_HIGH = 7
ARITHMETIC_OPCODES = frozenset({"add", "sub", "div", "mult"})
_RULE = "-" * 76


class Resources:
    """Shared I/O resources that processes need; indexed like process ids."""

    def __init__(self, count: int = PROCESS_COUNT) -> None:
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")
        self._busy = [False] * count
        self._lock = threading.Lock()

    def occupy(self, index: int) -> None:
        """Mark resource ``index`` as occupied."""
        with self._lock:
            self._busy[index] = True

    def release(self, index: int) -> None:
        """Mark resource ``index`` as free."""
        with self._lock:
            self._busy[index] = False

    def is_busy(self, index: int) -> bool:
        """Return True if resource ``index`` is occupied."""
        with self._lock:
            return self._busy[index]


class ProcessState(Enum):
    READY = "Ready"
    RUNNING = "Running"
    BLOCKED = "Blocked"
    ENDED = "Ended"


@dataclass
class ProcessControlBlock:
    """Bookkeeping the scheduler keeps for one process."""

    pid: int
    burst_time: int
    pc: int
    program: Path
    arrival_time: int = 0
    executed: int = 0
    state: ProcessState = ProcessState.READY
    stack: RegisterStack = field(default_factory=RegisterStack)
    sp: StackEntry | None = None

    @property
    def size(self) -> int:
        return self.burst_time

    @property
    def finished(self) -> bool:
        return self.executed >= self.burst_time


def _format_pointer(sp: object | None) -> str:
    return "(nil)" if sp is None else f"0x{id(sp):x}"


def format_pcb(pid: int, pc: int, state: ProcessState | str, sp: object | None) -> str:
    """Render a process control block the way the PCB panels show it."""
    state_text = state.value if isinstance(state, ProcessState) else state
    return (
        f"PID\t\t:{pid}\nPC\t\t\t:{pc}\nState\t\t:{state_text}\n"
        f"SP\t\t\t:{_format_pointer(sp)}\n"
    )


def parse_instruction(line: str) -> tuple[str, str | None]:
    """Split an instruction line into its opcode and optional operand."""
    words = line.split()
    if not words:
        raise ValueError("empty instruction")
    return words[0], (words[1] if len(words) > 1 else None)


def execute_program(path: str | Path, executed: int, stack: RegisterStack) -> int:
    """Apply the first ``executed`` lines of a program file to ``stack``.

    Arithmetic instructions pop an operand, all others push theirs.
    Returns the number of lines read; a missing file reads none.
    """
    try:
        handle = open(path, encoding="utf-8")
    except OSError:
        return 0
    count = 0
    with handle:
        for line in itertools.islice(handle, max(executed, 0)):
            count += 1
            if not line.strip():
                continue
            opcode, operand = parse_instruction(line)
            if opcode in ARITHMETIC_OPCODES:
                if len(stack):
                    stack.pop()
            elif operand is not None:
                stack.push(operand)
    return count


PcbCallback = Callable[[ProcessControlBlock], None]


class Scheduler:
    """Runs processes round robin, blocking those whose resource is busy."""

    def __init__(
        self,
        program_dir: str | Path = ".",
        resources: Resources | None = None,
        rng: random.Random | None = None,
        quantum: int = 2,
        delay: float = 1.0,
        output: TextIO | None = None,
        on_before: PcbCallback | None = None,
        on_after: PcbCallback | None = None,
    ) -> None:
        if quantum < 1:
            raise ValueError(f"quantum must be at least 1, got {quantum}")
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        self.program_dir = Path(program_dir)
        self.resources = resources if resources is not None else Resources()
        self.quantum = quantum
        self.delay = delay
        self._output = output
        self.on_before = on_before
        self.on_after = on_after
        rng = rng if rng is not None else random.Random()

        self.processes: list[ProcessControlBlock] = []
        pc = INITIAL_PC
        for pid in range(PROCESS_COUNT):
            burst = 2 * rng.randint(BURST_LOW, BURST_HIGH)
            program = self.program_dir / f"process{pid + 1}.txt"
            self.processes.append(ProcessControlBlock(pid, burst, pc, program))
            pc += burst

    def _write(self, text: str) -> None:
        out = self._output if self._output is not None else sys.stdout
        out.write(text)
        out.flush()

    def describe(self) -> str:
        """Return the table of processes with their arrival and burst times."""
        lines = ["process\tArrival time\t burst time\tPC\tSize"]
        lines.extend(
            f"{p.pid}\t{p.arrival_time}\t\t{p.burst_time}\t\t {p.pc} \t{p.size} "
            for p in self.processes
        )
        return "\n".join(lines) + "\n"

    def _state_table(self, title: str) -> str:
        rows = [
            f"\n{_RULE}",
            f"\t\t\t\t{title}",
            f"\n{_RULE}",
            "Process\t\tPC\t\tState\t\t\t\tSP",
        ]
        rows.extend(
            f"{p.pid}\t\t{p.pc}\t\t{p.state.value}\t\t\t{_format_pointer(p.sp)}"
            for p in self.processes
        )
        return "\n".join(rows) + "\n"

    def _run_slice(self, pcb: ProcessControlBlock) -> None:
        pcb.state = ProcessState.RUNNING
        self._write(self._state_table("Before execution"))
        if self.on_before:
            self.on_before(pcb)

        for _ in range(min(self.quantum, pcb.burst_time - pcb.executed)):
            pcb.executed += 1
            pcb.pc += 1
            time.sleep(self.delay)

        execute_program(pcb.program, pcb.executed, pcb.stack)
        pcb.state = ProcessState.READY
        pcb.sp = pcb.stack.pointer()
        self._write(self._state_table("After execution"))
        if self.on_after:
            self.on_after(pcb)
        time.sleep(2 * self.delay)

    def run(self) -> list[int]:
        """Schedule every process to completion; return pids in completion order."""
        ready = CircularQueue(len(self.processes))
        blocked = CircularQueue(len(self.processes))
        for pcb in self.processes:
            ready.enqueue(pcb.pid)

        self._write(self.describe())
        completed: list[int] = []
        while len(completed) < len(self.processes):
            head = blocked.front()
            if head is not None:
                blocked.dequeue()
                if self.resources.is_busy(head):
                    blocked.enqueue(head)
                else:
                    ready.enqueue(head)
                    self.processes[head].state = ProcessState.READY

            self._write(f"Ready {ready.display()}\n")
            self._write(f"Blocked {blocked.display()}\n")

            if not len(ready):
                time.sleep(self.delay)
                continue

            pcb = self.processes[ready.dequeue()]
            if self.resources.is_busy(pcb.pid):
                pcb.state = ProcessState.BLOCKED
                blocked.enqueue(pcb.pid)
                self._write(f"process {pcb.pid} is blocked\n")
                continue

            self._run_slice(pcb)
            if pcb.finished:
                pcb.state = ProcessState.ENDED
                completed.append(pcb.pid)
                self._write(f"process {pcb.pid} is completed\n")
            else:
                ready.enqueue(pcb.pid)
        return completed