"""Memo prompt construction and the text-generation client."""

from analyst.memo.client import MemoClient
from analyst.memo.client import MemoConfig
from analyst.memo.prompt import build_prompt
from analyst.memo.prompt import build_system_prompt

__all__ = [
  'MemoClient',
  'MemoConfig',
  'build_prompt',
  'build_system_prompt',
]
