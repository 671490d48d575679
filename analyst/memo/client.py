'''
Memo generation through the Gemini generateContent REST endpoint.

One request, one response. There is no retry: a missing API key or any
transport/response failure comes back as a fixed error string, which the
caller shows instead of the memo.

Usage:
  client = MemoClient()
  memo = client.generate_memo(context)
'''

from dataclasses import dataclass
import logging
import os
from typing import Any, Dict, Optional

import requests

from analyst.domain.types import AnalystContext
from analyst.memo.prompt import build_prompt
from analyst.memo.prompt import build_system_prompt

logger = logging.getLogger(__name__)

GEMINI_URL_TMPL = ('https://generativelanguage.googleapis.com/v1beta/models/'
                   '{model}:generateContent')

MISSING_KEY_ERROR = 'Error: API key not found in environment'
REQUEST_ERROR = 'Error generating memo. Please check API Key or try again.'
EMPTY_RESPONSE_ERROR = 'Error: No text generated.'


@dataclass(frozen=True)
class MemoConfig:
  '''
  Memo model settings.

  Attributes:
    model: Gemini model name
    temperature: Sampling temperature (low for factual output)
    timeout_sec: Request timeout
    api_key_env: Environment variables checked for the API key, in order
  '''
  model: str = 'gemini-3-pro-preview'
  temperature: float = 0.3
  timeout_sec: int = 120
  api_key_env: tuple[str, ...] = ('GEMINI_API_KEY', 'API_KEY')

  def resolve_api_key(self) -> Optional[str]:
    for name in self.api_key_env:
      value = os.environ.get(name)
      if value:
        return value
    return None


def _extract_text(payload: Dict[str, Any]) -> str:
  '''
  Join the text parts of the first candidate.

  Raises:
    ValueError: If the payload does not have the generateContent shape
  '''
  if not isinstance(payload, dict):
    raise ValueError(f'Unexpected response type: {type(payload).__name__}')
  candidates = payload.get('candidates') or []
  if not isinstance(candidates, list):
    raise ValueError('Unexpected candidates in response')
  if not candidates:
    return ''

  content = candidates[0].get('content') if isinstance(candidates[0],
                                                       dict) else None
  parts = content.get('parts') if isinstance(content, dict) else None
  if not isinstance(parts, list):
    raise ValueError('Unexpected content parts in response')

  texts = []
  for part in parts:
    text = part.get('text') if isinstance(part, dict) else None
    if not isinstance(text, str):
      raise ValueError('Unexpected text part in response')
    texts.append(text)
  return ''.join(texts)


class MemoClient:
  '''Single-shot memo writer.'''

  def __init__(
      self,
      config: Optional[MemoConfig] = None,
      api_key: Optional[str] = None,
      session: Optional[requests.Session] = None,
  ):
    '''
    Initialize memo client.

    Args:
      config: Model settings (default: MemoConfig())
      api_key: API key (default: resolved from the environment)
      session: requests session (default: module-level requests)
    '''
    self.config = config or MemoConfig()
    self.api_key = api_key or self.config.resolve_api_key()
    self.session = session

  def build_request(self, context: AnalystContext) -> Dict[str, Any]:
    '''Request body for generateContent.'''
    return {
        'systemInstruction': {
            'parts': [{
                'text': build_system_prompt(context)
            }]
        },
        'contents': [{
            'role': 'user',
            'parts': [{
                'text': build_prompt(context)
            }],
        }],
        'generationConfig': {
            'temperature': self.config.temperature
        },
    }

  def generate_memo(self, context: AnalystContext) -> str:
    '''
    Ask the model for a memo.

    Args:
      context: Analyst context

    Returns:
      Memo text, or one of the fixed error strings
    '''
    if not self.api_key:
      logger.error('No API key found in %s', ', '.join(self.config.api_key_env))
      return MISSING_KEY_ERROR

    url = GEMINI_URL_TMPL.format(model=self.config.model)
    post = self.session.post if self.session is not None else requests.post

    try:
      resp = post(
          url,
          params={'key': self.api_key},
          json=self.build_request(context),
          timeout=self.config.timeout_sec,
      )
      resp.raise_for_status()
      text = _extract_text(resp.json())
    except (requests.RequestException, ValueError, AttributeError, KeyError,
            TypeError, IndexError) as e:
      logger.error('Memo generation failed: %s', e)
      return REQUEST_ERROR

    if not text:
      logger.warning('Memo response contained no text')
      return EMPTY_RESPONSE_ERROR
    return text
