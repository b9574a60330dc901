from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence


@dataclass(frozen=True)
class LeaderboardRecord:
    """Running total of a student's score."""

    record_id: int
    student_fcc_id: str
    name: Optional[str]
    fcc_class: Optional[str]
    total_score: int
    last_updated: Optional[datetime]


@dataclass(frozen=True)
class ScoringTaskLog:
    log_id: int
    student_fcc_id: str
    task_id: int
    score_earned: int
    status: str
    completed_at: datetime


@dataclass(frozen=True)
class LeaderboardLogEntry:
    log_id: int
    leaderboard_id: int
    action: str
    description: str


@dataclass(frozen=True)
class TaskProgress:
    """A class task joined with the student's completion (score 0 when not earned)."""

    task_id: int
    task_name: str
    description: Optional[str]
    max_score: int
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    score_earned: int
    status: Optional[str]
    completed_at: Optional[datetime]


@dataclass(frozen=True)
class CompletionResult:
    task_log: ScoringTaskLog
    leaderboard: LeaderboardRecord
    leaderboard_log: LeaderboardLogEntry


@dataclass(frozen=True)
class StudentBoard:
    leaderboard: Sequence[LeaderboardRecord]
    tasks: Sequence[TaskProgress]
    student: Optional[LeaderboardRecord]
