"""Fatal machine faults.

Every exception here aborts the running program. Recoverable conditions
(arithmetic wraparound, out-of-range key values, empty sprites) are handled
by the opcodes themselves and never raise.
"""

from typing import Optional


class MachineFault(Exception):
    """Base class for faults raised by the CHIP-8 core.

    Attributes:
        opcode: Raw 16-bit instruction being executed, if known
        address: Address the instruction was fetched from, if known
    """

    def __init__(self, message: str, opcode: Optional[int] = None, address: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.opcode = opcode
        self.address = address

    def annotate(self, opcode: Optional[int], address: Optional[int]) -> "MachineFault":
        """Attach the failing instruction, keeping details already set."""
        if self.opcode is None:
            self.opcode = opcode
        if self.address is None:
            self.address = address
        return self

    def __str__(self) -> str:
        details = []
        if self.opcode is not None:
            details.append(f"opcode 0x{self.opcode:04X}")
        if self.address is not None:
            details.append(f"at 0x{self.address:03X}")
        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class StackOverflowError(MachineFault):
    """Subroutine call with all stack slots in use."""


class StackUnderflowError(MachineFault):
    """Return with an empty stack."""


class UnknownOpcodeError(MachineFault):
    """Instruction word that matches no known opcode pattern."""

    def __init__(self, opcode: int, address: Optional[int] = None):
        super().__init__("Unknown opcode", opcode=opcode, address=address)


class MemoryAccessError(MachineFault, IndexError):
    """Read or write outside the 4 KiB address space."""


class ProgramTooLargeError(MachineFault, ValueError):
    """Program image does not fit between 0x200 and the end of memory."""
