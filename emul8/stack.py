"""CHIP-8 stack operations."""

from typing import Tuple

from emul8.constants import ADDRESS_MASK
from emul8.errors import StackOverflow, StackUnderflow
from emul8.state import StackState


def depth(stack: StackState) -> int:
    """Number of frames the stack can hold."""
    return stack.data.shape[0]


def push(stack: StackState, address: int) -> StackState:
    """Push address onto stack."""
    if stack.pointer >= depth(stack):
        raise StackOverflow(depth(stack))
    new_data = stack.data.at[stack.pointer].set(address & ADDRESS_MASK)
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> Tuple[StackState, int]:
    """Pop address from stack."""
    if stack.pointer == 0:
        raise StackUnderflow()
    new_pointer = stack.pointer - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
