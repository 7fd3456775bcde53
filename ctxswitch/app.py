"""Window showing PCBs around each context switch, and the command entry point."""

from __future__ import annotations

import argparse
import queue
import random
import threading
from typing import Any

from ctxswitch.scheduler import ProcessControlBlock, Resources, Scheduler, format_pcb

EMPTY_PCB = "PID\t\t:-\nPC\t\t\t:-\nState\t\t:-\nSP\t\t\t:-\n"
_POLL_MS = 100


class ContextSwitchWindow:
    """Resource buttons and before/after PCB panels in a Tk window."""

    def __init__(self, root: Any, resources: Resources) -> None:
        import tkinter as tk

        self.root = root
        self.resources = resources
        self._updates: queue.SimpleQueue[tuple[Any, str]] = queue.SimpleQueue()

        root.title("context switch")
        root.geometry("200x200")

        for row, index in ((2, 1), (3, 2)):
            tk.Button(
                root,
                text=f"Resource {index} occupy",
                command=lambda i=index: self._occupy(i),
            ).grid(row=row, column=1)
            tk.Button(
                root,
                text=f"Resource {index} release",
                command=lambda i=index: self._release(i),
            ).grid(row=row, column=2)

        tk.Label(root, text="Before Execution:\n").grid(row=5, column=1)
        self._before = tk.Label(root, text=EMPTY_PCB, justify="left")
        self._before.grid(row=6, column=1)
        tk.Label(root, text="After Execution:\n").grid(row=7, column=1)
        self._after = tk.Label(root, text=EMPTY_PCB, justify="left")
        self._after.grid(row=8, column=1)

        root.after(_POLL_MS, self._poll)

    def _occupy(self, index: int) -> None:
        print(f"Resource {index} is occupied!")
        self.resources.occupy(index)

    def _release(self, index: int) -> None:
        print(f"Resource {index} released!")
        self.resources.release(index)

    def _poll(self) -> None:
        while True:
            try:
                label, text = self._updates.get_nowait()
            except queue.Empty:
                break
            label.config(text=text)
        self.root.after(_POLL_MS, self._poll)

    def show_before(self, pcb: ProcessControlBlock) -> None:
        """Queue the PCB as it stands before running; safe from any thread."""
        self._updates.put((self._before, format_pcb(pcb.pid, pcb.pc, pcb.state, pcb.sp)))

    def show_after(self, pcb: ProcessControlBlock) -> None:
        """Queue the PCB as it stands after running; safe from any thread."""
        self._updates.put((self._after, format_pcb(pcb.pid, pcb.pc, pcb.state, pcb.sp)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ctxswitch",
        description="Simulate round-robin scheduling with context switches.",
    )
    parser.add_argument("--programs", default=".", help="directory holding process1.txt .. process4.txt")
    parser.add_argument("--seed", type=int, default=None, help="seed for burst times")
    parser.add_argument("--delay", type=float, default=1.0, help="seconds per executed instruction")
    parser.add_argument("--quantum", type=int, default=2, help="instructions per time slice")
    parser.add_argument("--headless", action="store_true", help="run without the window")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.delay < 0:
        parser.error("--delay must not be negative")
    if args.quantum < 1:
        parser.error("--quantum must be at least 1")

    resources = Resources()
    rng = random.Random(args.seed)

    if args.headless:
        Scheduler(args.programs, resources, rng, args.quantum, args.delay).run()
        return 0

    import tkinter as tk

    root = tk.Tk()
    window = ContextSwitchWindow(root, resources)
    scheduler = Scheduler(
        args.programs,
        resources,
        rng,
        args.quantum,
        args.delay,
        on_before=window.show_before,
        on_after=window.show_after,
    )
    threading.Thread(target=scheduler.run, daemon=True).start()
    root.mainloop()
    return 0