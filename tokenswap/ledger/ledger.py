import contextlib
import threading
from typing import Callable, Dict, List, Optional, TypeVar

from tokenswap.config import get_program_id
from tokenswap.ledger.instruction import Instruction
from tokenswap.ledger.token_bank import TokenBank, TokenAccount
from tokenswap.ledger.types import Address
from tokenswap.tokenswap_logging import getLogger
from tokenswap.utils.data_logging import write_data

logger = getLogger(__name__)

R = TypeVar('R')


class Ledger:
    """
    Host of all persisted state: token balances and the records owned by the swap program.

    Every state change runs inside "transaction()", which serializes it against all other operations and reverts
    every mutation if the operation raises, so each operation either commits completely or leaves no trace.
    """

    def __init__(self, program_id: Optional[Address] = None, token_bank: Optional[TokenBank] = None):
        self.program_id = program_id if program_id is not None else Address(get_program_id())
        self.token_bank = token_bank if token_bank is not None else TokenBank()
        self.records: Dict[Address, object] = {}
        self.accepted_instructions: List[Instruction] = []
        self._lock = threading.RLock()
        self._depth = 0

    @contextlib.contextmanager
    def transaction(self):
        with self._lock:
            if self._depth > 0:
                # join the enclosing unit, which owns the snapshot
                self._depth += 1
                try:
                    yield self
                finally:
                    self._depth -= 1
            else:
                snapshot = self._snapshot()
                self._depth = 1
                try:
                    yield self
                except BaseException:
                    self._restore(snapshot)
                    logger.debug("reverted all changes of aborted transaction")
                    raise
                finally:
                    self._depth = 0

    def execute(self, instruction: Instruction, apply: Callable[[], R]) -> R:
        """
        Run "apply" as one atomic unit and record "instruction" if it commits
        """
        with self.transaction():
            ret = apply()
            self.accepted_instructions.append(instruction)
        write_data({"accepted": instruction.function_name})
        return ret

    ###########
    # RECORDS #
    ###########

    def get_record(self, address: Address) -> Optional[object]:
        with self._lock:
            return self.records.get(address)

    def has_record(self, address: Address) -> bool:
        with self._lock:
            return address in self.records

    def insert_record(self, address: Address, record: object) -> bool:
        """
        Insert-if-absent. Returns False (and changes nothing) if a record already exists at "address"
        """
        with self._lock:
            if address in self.records:
                return False
            self.records[address] = record
            return True

    def remove_record(self, address: Address) -> Optional[object]:
        with self._lock:
            return self.records.pop(address, None)

    def list_records(self) -> List[object]:
        with self._lock:
            return list(self.records.values())

    ############
    # BALANCES #
    ############

    def balance(self, token_account: Address) -> int:
        with self._lock:
            return self.token_bank.get_account(token_account).amount

    def find_token_account(self, address: Address) -> Optional[TokenAccount]:
        """
        Returns: a copy of the token account at "address", or None
        """
        with self._lock:
            account = self.token_bank.find_account(address)
            return account.copy() if account is not None else None

    def _snapshot(self):
        return self.token_bank.snapshot(), dict(self.records), len(self.accepted_instructions)

    def _restore(self, snapshot):
        bank, records, nof_instructions = snapshot
        self.token_bank.restore(bank)
        self.records = records
        del self.accepted_instructions[nof_instructions:]
