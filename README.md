# ctxswitch

A teaching simulator for round-robin CPU scheduling and context switching.

Four processes (pids 0 to 3) are created with random burst times, each an
even number from 4 to 14. The first process starts at program counter 1000
and each following one starts where the previous one's burst ends. Every
process owns a program file, `process1.txt` to `process4.txt`, holding one
instruction per line.

The scheduler takes processes from a ready queue and gives each a time
slice of `quantum` instructions. After a slice it applies the lines of the
process's program that have been executed so far to the process's own
register stack: an arithmetic instruction (`add`, `sub`, `div`, `mult`)
pops the stack, any other instruction pushes its operand. A missing program
file is simply skipped. The process table is printed before and after every
slice, together with the contents of the ready and blocked queues.

Each process is tied to the resource with the same number as its pid. When
that resource is occupied, the process is moved to the blocked queue, and it
goes back to the ready queue once the resource is released. The run ends
when every process has completed.

## Installation

```
pip install .
```

The window uses Tkinter, which ships with most Python installations.

## Running

Put `process1.txt` ... `process4.txt` in a directory and start the
simulator:

```
ctxswitch --programs path/to/programs
```

Options:

- `--programs DIR` – directory holding the program files (default: the
  current directory)
- `--seed N` – seed for the random burst times
- `--delay SECONDS` – pause per executed instruction (default 1.0); after
  each slice the simulator pauses for twice this long
- `--quantum N` – instructions per time slice (default 2)
- `--headless` – print the simulation only, without a window

A negative `--delay` or a `--quantum` below 1 is rejected.

Without `--headless` a window titled "context switch" opens. It has buttons
to occupy and release resources 1 and 2 while the simulation runs, and two
panels showing the process control block (PID, PC, state, stack pointer)
of the process about to run and of the process that has just run.

Each program line is an instruction followed by its operand, for example:

```
load x
add y
store z
```

## Using the building blocks

```python
from ctxswitch.circular_queue import CircularQueue, QueueFullError
from ctxswitch.register_stack import RegisterStack

ready = CircularQueue(4)
for pid in range(4):
    ready.enqueue(pid)

print(list(ready))      # [0, 1, 2, 3]
print(ready.dequeue())  # 0
print(len(ready))       # 3

stack = RegisterStack()
stack.push("x")
stack.push("y")
print(stack.top())      # y
print(stack.pop())      # y
print(len(stack))       # 1
```

Adding to a full `CircularQueue` raises `QueueFullError`; taking from an
empty queue or popping an empty stack raises `IndexError`.

`ctxswitch.scheduler` holds the simulation itself:

- `Scheduler(program_dir, resources, rng, quantum, delay, output,
  on_before, on_after)` sets up the four processes; `describe()` returns
  the process table and `run()` schedules everything to completion,
  returning the pids in the order they finished. `output` is the stream
  the trace is written to (standard output by default), and `on_before` /
  `on_after` are called with the `ProcessControlBlock` around each slice.
- `Resources` tracks occupied resources with `occupy`, `release` and
  `is_busy`.
- `ProcessControlBlock` and `ProcessState` describe each process.
- `format_pcb`, `parse_instruction` and `execute_program` render a control
  block, split an instruction line, and apply a program to a stack.

```python
import io, random
from ctxswitch.scheduler import Scheduler

sched = Scheduler("programs", rng=random.Random(1), delay=0, output=io.StringIO())
print(sched.run())
```

## Limits

The window only offers buttons for resources 1 and 2; resources 0 and 3
can be occupied only through `Resources` in code. The number of processes
is fixed at four.

## Tests

```
pip install ".[test]"
pytest
```