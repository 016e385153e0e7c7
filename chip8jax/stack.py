"""CHIP-8 stack operations."""

import jax.numpy as jnp
from chip8jax.constants import ADDRESS_MASK, STACK_SIZE
from chip8jax.errors import StackOverflowError, StackUnderflowError
from chip8jax.state import StackState


def push(stack: StackState, address) -> StackState:
    """Push address onto stack."""
    if stack.pointer >= STACK_SIZE:
        raise StackOverflowError(f"Stack overflow: all {STACK_SIZE} return slots in use")
    masked_address = int(address) & ADDRESS_MASK
    new_data = stack.data.at[stack.pointer].set(masked_address)
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    if stack.pointer <= 0:
        raise StackUnderflowError("Stack underflow: return with empty stack")
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
