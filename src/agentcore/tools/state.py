"""
Per-session tool state.

The calling session owns a ToolState and passes it into every tool call.
Tools never keep state of their own between calls.
"""

from dataclasses import dataclass, field


@dataclass
class FileLineTracker:
    """
    Line statistics for one file, updated by each fsWrite to that file.

    Attributes:
        prev_fswrite_lines: Line count at the end of the previous fsWrite
        before_fswrite_lines: Line count before the current fsWrite
        after_fswrite_lines: Line count after the current fsWrite
        lines_added_by_agent: Lines added by the current fsWrite
        lines_removed_by_agent: Lines removed by the current fsWrite
        is_first_write: True until the first fsWrite to the file completes
    """

    prev_fswrite_lines: int = 0
    before_fswrite_lines: int = 0
    after_fswrite_lines: int = 0
    lines_added_by_agent: int = 0
    lines_removed_by_agent: int = 0
    is_first_write: bool = True

    @property
    def lines_by_user(self) -> int:
        """Lines changed outside of fsWrite since the previous write."""
        return self.before_fswrite_lines - self.prev_fswrite_lines

    @property
    def lines_by_agent(self) -> int:
        """Lines changed by the current write."""
        return self.lines_added_by_agent + self.lines_removed_by_agent

    def record(self, before: int, after: int, added: int, removed: int) -> None:
        """Record one completed write."""
        self.prev_fswrite_lines = self.after_fswrite_lines
        self.before_fswrite_lines = before
        self.after_fswrite_lines = after
        self.lines_added_by_agent = added
        self.lines_removed_by_agent = removed
        self.is_first_write = False


@dataclass
class ToolState:
    """
    State a session carries across tool calls.

    Attributes:
        file_line_trackers: Line statistics keyed by canonical file path
    """

    file_line_trackers: dict[str, FileLineTracker] = field(default_factory=dict)

    def line_tracker(self, path: str) -> FileLineTracker:
        """Return the tracker for `path`, creating an empty one on first use."""
        tracker = self.file_line_trackers.get(path)
        if tracker is None:
            tracker = FileLineTracker()
            self.file_line_trackers[path] = tracker
        return tracker
