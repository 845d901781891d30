from typing import Dict

from enforce_typing import enforce_types

from tokenswap.ledger.types import Address


class Instruction:
    """
    One call of a program function, as submitted by "signer"
    """

    @enforce_types
    def __init__(self, program_id: Address, function_name: str, signer: Address, arguments: dict):
        self.program_id = program_id
        self.function_name = function_name
        self.signer = signer
        self.arguments = arguments

    def to_dict(self) -> Dict:
        return {
            "program_id": str(self.program_id),
            "function_name": self.function_name,
            "signer": str(self.signer),
            "arguments": {k: str(v) if isinstance(v, bytes) else v for k, v in self.arguments.items()},
        }

    def __str__(self):
        args = ", ".join(f"{k}={v}" for k, v in self.to_dict()["arguments"].items())
        return f"{self.function_name}({args}) signed by {self.signer}"
