from .bigint import BigInt4096, BITS, NUM_WORDS, WORD_BITS, WORD_MASK
from .errors import BigPrimeError, DivisionByZero, MalformedNumericParse, ZeroModulus
from .numtheory import WITNESSES, is_prime, mod_exp, split_power_of_two
from .tasks import Deadline, Mode, TaskResult, largest_prime_at_most, nth_prime, primes_up_to, run_task, write_primes
__all__ = [
    "BigInt4096", "BITS", "NUM_WORDS", "WORD_BITS", "WORD_MASK",
    "BigPrimeError", "DivisionByZero", "MalformedNumericParse", "ZeroModulus",
    "WITNESSES", "is_prime", "mod_exp", "split_power_of_two",
    "Deadline", "Mode", "TaskResult", "largest_prime_at_most", "nth_prime", "primes_up_to", "run_task", "write_primes",
]
