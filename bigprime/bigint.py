# bigprime/bigint.py
# Fixed-width 4096-bit unsigned integer
# - 64 x 64-bit words, least significant first
# - add / sub / mul wrap silently modulo 2^4096
# - schoolbook multiply, bit-serial long division
# - decimal text in and out

from __future__ import annotations
from typing import Iterable, Optional, List, Tuple

from .errors import DivisionByZero, MalformedNumericParse

WORD_BITS = 64
NUM_WORDS = 64
BITS = WORD_BITS * NUM_WORDS
WORD_MASK = (1 << WORD_BITS) - 1

_MODULUS = 1 << BITS
_DIGITS = "0123456789"

# ---------- word-list helpers ----------

def _significant(words) -> int:
    """Count of words up to and including the highest nonzero one."""
    n = len(words)
    while n and not words[n - 1]:
        n -= 1
    return n

def _bit_length(words) -> int:
    n = _significant(words)
    if not n:
        return 0
    return (n - 1) * WORD_BITS + words[n - 1].bit_length()

def _compare(a, b, n: int) -> int:
    # most significant word decides
    hi_a, hi_b = a[:n][::-1], b[:n][::-1]
    return (hi_a > hi_b) - (hi_a < hi_b)

def _sub_in_place(a, b, n: int) -> int:
    """a[:n] -= b[:n]; returns the borrow out of word n-1."""
    borrow = 0
    for i in range(n):
        diff = a[i] - b[i] - borrow
        a[i] = diff & WORD_MASK
        borrow = 1 if diff < 0 else 0
    return borrow

def _shl1_in_place(a, n: int) -> int:
    """Shift a[:n] left by one bit; returns the bit pushed out of word n-1."""
    carry = 0
    for i in range(n):
        w = a[i]
        a[i] = ((w << 1) & WORD_MASK) | carry
        carry = w >> (WORD_BITS - 1)
    return carry

def _short_divmod(words, divisor: int) -> Tuple[List[int], int]:
    # single-word divisor: one 128/64 step per word, top down
    quotient = [0] * NUM_WORDS
    rem = 0
    for i in range(_significant(words) - 1, -1, -1):
        quotient[i], rem = divmod((rem << WORD_BITS) | words[i], divisor)
    return quotient, rem

def _long_divmod(dividend, divisor) -> Tuple[List[int], List[int]]:
    """
    Binary long division, most significant dividend bit first.
    The remainder never needs more than one word above the divisor.
    """
    width = min(NUM_WORDS, _significant(divisor) + 1)
    quotient = [0] * NUM_WORDS
    rem = [0] * width
    # leading zero bits of the dividend leave the remainder at zero
    for i in range(_bit_length(dividend) - 1, -1, -1):
        word, bit = divmod(i, WORD_BITS)
        overflow = _shl1_in_place(rem, width)
        rem[0] |= (dividend[word] >> bit) & 1
        # a bit pushed past word 63 means rem > any divisor
        if overflow or _compare(rem, divisor, width) >= 0:
            _sub_in_place(rem, divisor, width)
            quotient[word] |= 1 << bit
    return quotient, rem + [0] * (NUM_WORDS - width)

def _operand(value) -> Optional["BigInt4096"]:
    if isinstance(value, BigInt4096):
        return value
    if isinstance(value, int):
        return BigInt4096(value)
    return None

def _comparable(value) -> Optional["BigInt4096"]:
    # no wraparound here: equal values must hash equally
    if isinstance(value, int) and not 0 <= value < _MODULUS:
        return None
    return _operand(value)

def _shift_count(shift) -> int:
    if isinstance(shift, BigInt4096):
        shift = int(shift)
    elif not isinstance(shift, int):
        raise TypeError(f"shift count must be int, not {type(shift).__name__}")
    if shift < 0:
        raise ValueError("negative shift count")
    return shift


class BigInt4096:
    """Unsigned integer modulo 2^4096 stored as 64 little-endian 64-bit words."""

    __slots__ = ("_w",)

    def __init__(self, value=0):
        if isinstance(value, BigInt4096):
            self._w = list(value._w)
        elif isinstance(value, int):
            self._w = [0] * NUM_WORDS
            if 0 <= value <= WORD_MASK:
                self._w[0] = value
            else:
                value %= _MODULUS
                for i in range(NUM_WORDS):
                    self._w[i] = value & WORD_MASK
                    value >>= WORD_BITS
        elif isinstance(value, str):
            self._w = [0] * NUM_WORDS
            ten = BigInt4096(10)
            for ch in value:
                if ch not in _DIGITS:
                    continue  # non-digits are skipped, not rejected
                self *= ten
                self += BigInt4096(ord(ch) - ord("0"))
        else:
            raise TypeError(f"cannot build BigInt4096 from {type(value).__name__}")

    @classmethod
    def _wrap(cls, words: List[int]) -> "BigInt4096":
        obj = cls.__new__(cls)
        obj._w = words
        return obj

    @classmethod
    def from_words(cls, words: Iterable[int]) -> "BigInt4096":
        words = list(words)
        if len(words) != NUM_WORDS:
            raise ValueError(f"expected {NUM_WORDS} words, got {len(words)}")
        for w in words:
            if not isinstance(w, int) or not 0 <= w <= WORD_MASK:
                raise ValueError(f"word out of range: {w!r}")
        return cls._wrap(words)

    @property
    def words(self) -> Tuple[int, ...]:
        return tuple(self._w)

    def bit_length(self) -> int:
        return _bit_length(self._w)

    # ---------- arithmetic ----------

    def __add__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        a, b = self._w, other._w
        n = max(_significant(a), _significant(b))
        out = [0] * NUM_WORDS
        carry = 0
        for i in range(n):
            s = a[i] + b[i] + carry
            out[i] = s & WORD_MASK
            carry = s >> WORD_BITS
        if carry and n < NUM_WORDS:
            out[n] = carry
        return BigInt4096._wrap(out)

    __radd__ = __add__

    def __sub__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        out = list(self._w)
        n = max(_significant(out), _significant(other._w))
        if _sub_in_place(out, other._w, n) and n < NUM_WORDS:
            # the borrow ripples through every zero word above n
            out[n:] = [WORD_MASK] * (NUM_WORDS - n)
        return BigInt4096._wrap(out)

    def __rsub__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        a, b = self._w, other._w
        sb = _significant(b)
        out = [0] * NUM_WORDS
        for i in range(_significant(a)):
            ai = a[i]
            if not ai:
                continue
            carry = 0
            for j in range(min(sb, NUM_WORDS - i)):
                t = ai * b[j] + out[i + j] + carry
                out[i + j] = t & WORD_MASK
                carry = t >> WORD_BITS
            # rows below i never reach word i+sb
            if i + sb < NUM_WORDS:
                out[i + sb] = carry
        return BigInt4096._wrap(out)

    __rmul__ = __mul__

    def _divmod(self, other: "BigInt4096", op: str):
        if not other:
            raise DivisionByZero(op)
        if _significant(other._w) == 1:
            quotient, r = _short_divmod(self._w, other._w[0])
            rem = [0] * NUM_WORDS
            rem[0] = r
        else:
            quotient, rem = _long_divmod(self._w, other._w)
        return BigInt4096._wrap(quotient), BigInt4096._wrap(rem)

    def __divmod__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return self._divmod(other, "division")

    def __rdivmod__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return other._divmod(self, "division")

    def __floordiv__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return self._divmod(other, "division")[0]

    def __rfloordiv__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return other._divmod(self, "division")[0]

    # no fractions: / truncates exactly like //
    __truediv__ = __floordiv__
    __rtruediv__ = __rfloordiv__

    def __mod__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return self._divmod(other, "modulo")[1]

    def __rmod__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return other._divmod(self, "modulo")[1]

    # ---------- bitwise ----------

    def __and__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return BigInt4096._wrap([x & y for x, y in zip(self._w, other._w)])

    def __or__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return BigInt4096._wrap([x | y for x, y in zip(self._w, other._w)])

    def __xor__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return BigInt4096._wrap([x ^ y for x, y in zip(self._w, other._w)])

    __rand__ = __and__
    __ror__ = __or__
    __rxor__ = __xor__

    def __invert__(self):
        return BigInt4096._wrap([w ^ WORD_MASK for w in self._w])

    # ---------- shifts ----------

    def __lshift__(self, shift):
        word_shift, bit_shift = divmod(_shift_count(shift), WORD_BITS)
        src = self._w
        out = [0] * NUM_WORDS
        top = min(NUM_WORDS, _significant(src) + word_shift + 1)
        for i in range(word_shift, top):
            w = (src[i - word_shift] << bit_shift) & WORD_MASK
            if bit_shift and i > word_shift:
                w |= src[i - word_shift - 1] >> (WORD_BITS - bit_shift)
            out[i] = w
        return BigInt4096._wrap(out)

    def __rshift__(self, shift):
        word_shift, bit_shift = divmod(_shift_count(shift), WORD_BITS)
        src = self._w
        out = [0] * NUM_WORDS
        for i in range(_significant(src) - word_shift):
            w = src[i + word_shift] >> bit_shift
            if bit_shift and i + word_shift + 1 < NUM_WORDS:
                w |= (src[i + word_shift + 1] << (WORD_BITS - bit_shift)) & WORD_MASK
            out[i] = w
        return BigInt4096._wrap(out)

    # ---------- compound assignment (mutates the receiver) ----------

    def _assign(self, result):
        if result is NotImplemented:
            return result
        self._w[:] = result._w
        return self

    def __iadd__(self, other): return self._assign(self.__add__(other))
    def __isub__(self, other): return self._assign(self.__sub__(other))
    def __imul__(self, other): return self._assign(self.__mul__(other))
    def __ifloordiv__(self, other): return self._assign(self.__floordiv__(other))
    def __itruediv__(self, other): return self._assign(self.__truediv__(other))
    def __imod__(self, other): return self._assign(self.__mod__(other))
    def __iand__(self, other): return self._assign(self.__and__(other))
    def __ior__(self, other): return self._assign(self.__or__(other))
    def __ixor__(self, other): return self._assign(self.__xor__(other))
    def __ilshift__(self, shift): return self._assign(self.__lshift__(shift))
    def __irshift__(self, shift): return self._assign(self.__rshift__(shift))

    # ---------- comparison ----------

    def __eq__(self, other):
        other = _comparable(other)
        if other is None:
            return NotImplemented
        return self._w == other._w

    def __ne__(self, other):
        other = _comparable(other)
        if other is None:
            return NotImplemented
        return self._w != other._w

    def __lt__(self, other):
        other = _comparable(other)
        if other is None:
            return NotImplemented
        return _compare(self._w, other._w, NUM_WORDS) < 0

    def __gt__(self, other):
        other = _comparable(other)
        if other is None:
            return NotImplemented
        return other < self

    def __le__(self, other):
        other = _comparable(other)
        if other is None:
            return NotImplemented
        return not other < self

    def __ge__(self, other):
        other = _comparable(other)
        if other is None:
            return NotImplemented
        return not self < other

    def __hash__(self):
        return hash(int(self))

    # ---------- conversion ----------

    def __bool__(self):
        return any(self._w)

    def __int__(self):
        value = 0
        for w in reversed(self._w):
            value = (value << WORD_BITS) | w
        return value

    def to_decimal(self) -> str:
        """Decimal digits by repeated divide-by-ten; zero is "0"."""
        if not self:
            return "0"
        ten = BigInt4096(10)
        temp = BigInt4096(self)
        digits = []
        while temp:
            temp, digit = divmod(temp, ten)
            digits.append(_DIGITS[digit._w[0]])
        return "".join(reversed(digits))

    __str__ = to_decimal

    def __repr__(self):
        return f"BigInt4096({self.to_decimal()})"

    @classmethod
    def parse(cls, text: str) -> "BigInt4096":
        """
        Strict token read: one whitespace-delimited token and nothing after it.
        Non-digits inside the token are still skipped by the constructor.
        """
        stripped = text.lstrip()
        parts = stripped.split(None, 1)
        if not parts:
            raise MalformedNumericParse(text, "empty token")
        token = parts[0]
        if len(stripped) != len(token):
            raise MalformedNumericParse(text, "trailing characters after token")
        if not any(ch in _DIGITS for ch in token):
            raise MalformedNumericParse(text, "no decimal digits")
        return cls(token)

    @classmethod
    def read(cls, stream) -> "BigInt4096":
        """Read the next whitespace-delimited token from a text stream."""
        ch = stream.read(1)
        while ch and ch.isspace():
            ch = stream.read(1)
        chars = []
        while ch and not ch.isspace():
            chars.append(ch)
            ch = stream.read(1)
        return cls.parse("".join(chars))
