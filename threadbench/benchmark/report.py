#!/usr/bin/env python3
"""
Console rendering of progress and the final results table.
"""

import sys
from typing import List, Optional, TextIO

from threadbench.benchmark.cases import Cases, Phase

HEADER_FORMAT = "%-6s%-8s%11s%10s%10s%10s%10s"
ROW_FORMAT = "%1s %2d.    %3d  %11.3f%10.3f%10.3f%10.3f%10.3f%s"


class ProgressLine:
    """
    Single console line showing the phase and case being run.

    On a terminal the line is redrawn in place; otherwise every update is
    printed on its own line.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self._interactive = hasattr(self.stream, "isatty") and self.stream.isatty()
        self._width = 0

    def __call__(self, label: str, number: int) -> None:
        text = f"{label}{number:2d}"
        if self._interactive:
            self.stream.write("\b" * self._width + text)
            self._width = len(text)
        else:
            self.stream.write(text + "\n")
        self.stream.flush()

    def finish(self) -> None:
        if self._interactive and self._width:
            self.stream.write("\n")
            self.stream.flush()
        self._width = 0


def format_results(cases: Cases) -> List[str]:
    """Render the results table, one string per line. Times are shown in seconds."""
    lines = [f"Total test time: {cases.total_ms / 1000.0:4.3f} s"]
    lines.append(HEADER_FORMAT % (" Case", " Num of", "Total ", "CPU  ", "File W ", "File R ", "File D "))
    lines.append(HEADER_FORMAT % ("   #", " threads", "(s)  ", "(s)  ", "(s)  ", "(s)  ", "(s)  "))

    for case in cases:
        lines.append(
            ROW_FORMAT % (
                "*" if case.num_of_threads == cases.num_of_processors else "",
                case.number,
                case.num_of_threads,
                case.total_ms / 1000.0,
                case.cpu_ms / 1000.0,
                case.file_write_ms / 1000.0,
                case.file_read_ms / 1000.0,
                case.file_delete_ms / 1000.0,
                "  !" if case.failed else "",
            )
        )

    failed = [case for case in cases if case.failed]
    if failed:
        lines.append("")
        lines.append("! Abandoned phases:")
        for case in failed:
            for phase in Phase:
                if phase in case.failures:
                    lines.append(f"  case {case.number}, {phase.label}: {case.failures[phase]}")
    return lines


def print_results(cases: Cases, stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    for line in format_results(cases):
        print(line, file=stream)
