from household_profiler.repositories.interfaces import MemberRepository
from household_profiler.repositories.memory import InMemoryMemberRepository
from household_profiler.repositories.sqlite import (
    SQLiteDatabase,
    SQLiteMemberRepository,
)

__all__ = [
    "InMemoryMemberRepository",
    "MemberRepository",
    "SQLiteDatabase",
    "SQLiteMemberRepository",
]
