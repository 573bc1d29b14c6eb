import logging
from concurrent.futures import Future
from typing import Optional

from . import data_handler, movement_log
from .advisor import StockAdvisor
from .aggregator import compute_summaries
from .commands import Command, CommandResult, ConfirmFunc, apply_command
from .data_handler import KeyValueStore
from .schemas import StockSummary
from .state import InventoryState

logger = logging.getLogger(__name__)


class InventoryController:
    """
    Owns the application state and wires it to the store and the advisor.
    Call load() once at start; every successful command is saved right away.
    """

    def __init__(
        self,
        store: KeyValueStore,
        confirm: Optional[ConfirmFunc] = None,
        advisor: Optional[StockAdvisor] = None,
    ):
        self.store = store
        self.confirm = confirm
        self.advisor = advisor or StockAdvisor()
        self.state = InventoryState()

    def load(self) -> InventoryState:
        self.state = data_handler.load_state(self.store)
        return self.state

    def save(self) -> None:
        data_handler.save_state(self.store, self.state)

    def dispatch(self, command: Command) -> CommandResult:
        result = apply_command(self.state, command, self.confirm)
        if result.changed:
            self.state = result.state
            self.save()
        elif result.message:
            logger.info(result.message)
        return result

    def summaries(self) -> list[StockSummary]:
        # Always recomputed from the current snapshot.
        return compute_summaries(self.state.products, self.state.movements)

    @property
    def is_analyzing(self) -> bool:
        return self.advisor.is_analyzing

    @property
    def analysis(self) -> str:
        return self.advisor.analysis

    def analyze(self) -> str:
        return self.advisor.analyze(
            self.summaries(), movement_log.recent_movements(self.state.movements)
        )

    def analyze_async(self) -> Future:
        return self.advisor.analyze_async(
            self.summaries(), movement_log.recent_movements(self.state.movements)
        )

    def close(self) -> None:
        """Waits for a running analysis and stops the advisor's worker."""
        self.advisor.shutdown()
