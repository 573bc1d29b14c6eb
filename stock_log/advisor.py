import json
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

import requests

from . import settings
from .errors import AnalysisInProgressError
from .schemas import Movement, StockSummary

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """Act as a logistics expert. Analyze this real inventory data:
Products: {summaries}.
Recent movements: {movements}.
Tell me:
1. Which products are at risk of running out?
2. Which one has the highest turnover?
3. One strategic recommendation.
Use a professional and direct tone."""


def build_prompt(summaries: list[StockSummary], recent: list[Movement]) -> str:
    """Embeds the stock summary and the latest movements, as JSON, in the prompt."""
    return PROMPT_TEMPLATE.format(
        summaries=json.dumps([s.model_dump(mode="json", by_alias=True) for s in summaries]),
        movements=json.dumps([m.model_dump(mode="json", by_alias=True) for m in recent]),
    )


def _extract_text(body: dict) -> str:
    candidates = body.get("candidates") or []
    if not candidates:
        return ""
    parts = candidates[0].get("content", {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts)


def request_analysis(
    prompt: str, api_key: Optional[str] = None, model: Optional[str] = None
) -> str:
    """
    Sends the prompt to the text-generation endpoint and returns the reply.
    Never raises for service problems: any failure becomes the fixed
    "could not connect" text, with no retry.
    """
    api_key = settings.API_KEY if api_key is None else api_key
    model = model or settings.AI_MODEL
    url = f"{settings.AI_API_URL}/models/{model}:generateContent"
    payload = {"contents": [{"parts": [{"text": prompt}]}]}
    headers = {"x-goog-api-key": api_key}

    logger.info(f"🚀 Requesting stock analysis from {model}")
    try:
        response = requests.post(url, json=payload, headers=headers, timeout=settings.AI_TIMEOUT)
        response.raise_for_status()
        text = _extract_text(response.json())
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error calling the AI service: {e}")
        return settings.AI_FAILURE_TEXT
    except (ValueError, AttributeError, TypeError) as e:
        logger.error(f"❌ Unexpected response from the AI service: {e}")
        return settings.AI_FAILURE_TEXT

    if not text:
        logger.warning("⚠️ The AI service returned no text.")
        return settings.AI_EMPTY_TEXT
    logger.info("✅ Stock analysis received.")
    return text


class StockAdvisor:
    """
    Holds the latest analysis text and runs at most one request at a time.
    A request made while another is in flight is rejected, not queued.
    """

    def __init__(self, analyze_func: Callable[[str], str] = request_analysis):
        self.analyze_func = analyze_func
        self.analysis = ""
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def is_analyzing(self) -> bool:
        return self._lock.locked()

    def _acquire(self) -> None:
        if not self._lock.acquire(blocking=False):
            raise AnalysisInProgressError("An analysis is already running.")

    def _run(self, prompt: str) -> str:
        try:
            self.analysis = self.analyze_func(prompt)
            return self.analysis
        finally:
            self._lock.release()

    def analyze(self, summaries: list[StockSummary], recent: list[Movement]) -> str:
        """Blocking request. Raises AnalysisInProgressError if one is already running."""
        prompt = build_prompt(summaries, recent)
        self._acquire()
        return self._run(prompt)

    def analyze_async(self, summaries: list[StockSummary], recent: list[Movement]) -> Future:
        """Same as analyze() but runs on a background worker and returns a Future."""
        prompt = build_prompt(summaries, recent)
        self._acquire()
        try:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="stock-advisor")
            return self._executor.submit(self._run, prompt)
        except RuntimeError:
            self._lock.release()
            raise

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
