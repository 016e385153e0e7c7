"""Stateful CHIP-8 machine for driver loops.

``Machine`` wraps the functional core: every call replaces ``self.state``
with the state returned by the matching function in ``chip8jax.emulator``.
Drivers own pacing. ``step`` runs at the instruction rate and
``tick_timers`` at 60 Hz, both from a single thread.
"""

from typing import Optional, Union

import jax
import jax.numpy as jnp

from chip8jax import emulator
from chip8jax.constants import NUM_KEYS
from chip8jax.errors import MachineFault
from chip8jax.logging import ConsoleLogger
from chip8jax.stack import push, pop
from chip8jax.state import EmulatorState, create_state


class Machine:
    """CHIP-8 virtual machine: memory, registers, stack, timers, keypad, display.

    Args:
        rng: JAX PRNG key used as the random source for CXNN. Defaults to
            ``jax.random.PRNGKey(0)``.
        modern_mode: Use the modern quirk set for shifts, BNNN and FX55/FX65
            instead of the original interpreter's behavior.
        logger: Optional logger for lifecycle events and faults.
    """

    def __init__(
        self,
        rng: Optional[jax.Array] = None,
        modern_mode: bool = False,
        logger: Optional[ConsoleLogger] = None,
    ):
        self.rng = rng if rng is not None else jax.random.PRNGKey(0)
        self.modern_mode = modern_mode
        self.logger = logger
        self.state: EmulatorState = create_state(self.rng, modern_mode=modern_mode)

    @classmethod
    def new(cls, **kwargs) -> "Machine":
        return cls(**kwargs)

    def _log(self, level: str, message: str):
        if self.logger is not None:
            self.logger.log(level, message)

    # Lifecycle

    def reset(self) -> None:
        """Return to the freshly constructed state."""
        self.state = create_state(self.rng, modern_mode=self.modern_mode)
        self._log("DEBUG", "Machine reset")

    def load_program(self, program: Union[bytes, bytearray]) -> None:
        self.state = emulator.load_program(self.state, program)
        self._log("INFO", f"Loaded {len(program)} byte program")

    def load_rom(self, filename: str) -> None:
        self.state = emulator.load_rom(self.state, filename)
        self._log("INFO", f"Loaded {filename}")

    # Execution

    def fetch(self) -> int:
        """Read the opcode at PC and advance PC by 2."""
        self.state, instruction = emulator.fetch(self.state)
        return instruction

    def execute(self, instruction: int) -> None:
        self.state = emulator.execute(self.state, instruction)

    def step(self) -> int:
        """Run one instruction cycle and return the executed opcode."""
        try:
            self.state, instruction = emulator.step(self.state)
        except MachineFault as fault:
            self._log("ERROR", f"Machine fault: {fault}")
            raise
        return instruction

    def tick_timers(self) -> bool:
        """Decrement the timers; True when the sound timer just ran out."""
        self.state, tone = emulator.tick_timers(self.state)
        return tone

    # Input

    def set_key(self, index: int, pressed: bool) -> None:
        if not 0 <= index < NUM_KEYS:
            raise ValueError(f"Key index must be in [0, {NUM_KEYS - 1}], got {index}")
        self.state = self.state.replace(keypad=self.state.keypad.at[index].set(bool(pressed)))

    def release_all_keys(self) -> None:
        self.state = self.state.replace(keypad=jnp.zeros_like(self.state.keypad))

    # Stack

    def push(self, address: int) -> None:
        self.state = self.state.replace(stack=push(self.state.stack, address))

    def pop(self) -> int:
        stack, address = pop(self.state.stack)
        self.state = self.state.replace(stack=stack)
        return int(address)

    # State views

    @property
    def program_counter(self) -> int:
        return int(self.state.pc)

    @property
    def index_register(self) -> int:
        return int(self.state.I)

    @property
    def registers(self) -> jnp.ndarray:
        return self.state.V

    @property
    def memory(self) -> jnp.ndarray:
        return self.state.memory

    @property
    def stack(self) -> jnp.ndarray:
        return self.state.stack.data

    @property
    def stack_pointer(self) -> int:
        return self.state.stack.pointer

    @property
    def keypad(self) -> jnp.ndarray:
        return self.state.keypad

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @property
    def sound_active(self) -> bool:
        return self.sound_timer > 0

    @property
    def framebuffer(self) -> jnp.ndarray:
        """Flat, row-major 64x32 display; pixel (x, y) is at ``y * 64 + x``."""
        return self.state.display
