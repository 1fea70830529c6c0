"""
字母表模块
字符与 0..radix-1 之间的双射，以及 FF3-1 允许的长度范围
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable

from .constants import Alphabets, Config
from .errors import InvalidAlphabetError, InvalidSymbolError, OutOfRangeError


def _compute_min_length(radix: int) -> int:
    """最小长度：radix^⌈n/2⌉ ≥ 100 且 n ≥ 2"""
    n = 2
    while radix ** ((n + 1) // 2) < Config.MIN_DOMAIN_SIZE:
        n += 1
    return n


def _compute_max_length(radix: int) -> int:
    """最大长度：较长的一半其数值必须落在 96 位以内"""
    limit = 1 << Config.MAX_DOMAIN_BITS
    half = 0
    while radix ** (half + 1) <= limit:
        half += 1
    return 2 * half


@dataclass(frozen=True)
class Alphabet:
    """有序、无重复的字符集合"""
    symbols: str
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)
    _min_length: int = field(init=False, repr=False, compare=False)
    _max_length: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(self.symbols) < 2:
            raise InvalidAlphabetError(f"字母表至少需要 2 个字符，当前为 {len(self.symbols)} 个")
        index = {symbol: i for i, symbol in enumerate(self.symbols)}
        if len(index) != len(self.symbols):
            raise InvalidAlphabetError("字母表包含重复字符")
        object.__setattr__(self, "_index", index)
        object.__setattr__(self, "_min_length", _compute_min_length(len(self.symbols)))
        object.__setattr__(self, "_max_length", _compute_max_length(len(self.symbols)))

    @classmethod
    def from_symbols(cls, symbols: Iterable[str]) -> "Alphabet":
        """去重后构建字母表，保留首次出现的顺序"""
        if isinstance(symbols, Alphabet):
            return symbols
        return cls("".join(dict.fromkeys(symbols)))

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._index

    @property
    def radix(self) -> int:
        return len(self.symbols)

    @property
    def min_length(self) -> int:
        return self._min_length

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def is_usable(self) -> bool:
        return self.min_length <= self.max_length

    def index_of(self, symbol: str) -> int:
        try:
            return self._index[symbol]
        except KeyError:
            raise InvalidSymbolError(f"字符 {symbol!r} 不在字母表中") from None

    def symbol_at(self, index: int) -> str:
        if not 0 <= index < self.radix:
            raise OutOfRangeError(f"下标 {index} 超出范围 [0, {self.radix})")
        return self.symbols[index]

    def contains(self, text: str) -> bool:
        return all(ch in self._index for ch in text)

    def decode(self, text: str) -> int:
        """按 radix 进制解析字符串，高位在前"""
        value = 0
        for ch in text:
            value = value * self.radix + self.index_of(ch)
        return value

    def encode(self, value: int, length: int) -> str:
        """把整数编码为定长字符串，高位在前，左侧补零字符"""
        if value < 0:
            raise OutOfRangeError(f"数值 {value} 不能为负")
        digits = []
        while value:
            value, digit = divmod(value, self.radix)
            digits.append(self.symbols[digit])
        if len(digits) > length:
            raise OutOfRangeError(f"数值需要 {len(digits)} 位，超过长度 {length}")
        digits.extend(self.symbols[0] * (length - len(digits)))
        return "".join(reversed(digits))


DIGITS = Alphabet(Alphabets.DIGITS)
LOWER_ALPHA = Alphabet(Alphabets.LOWER_ALPHA)
UPPER_ALPHA = Alphabet(Alphabets.UPPER_ALPHA)
ALPHANUMERIC = Alphabet(Alphabets.ALPHANUMERIC)
EMAIL = Alphabet(Alphabets.EMAIL)
DEFAULT = ALPHANUMERIC


def derive_alphabet(text: str, *extra: str, exclude: Iterable[str] = ()) -> Alphabet:
    """
    为输入派生自定义字母表：基础字母数字 + 额外字符集 + 输入中出现的字符。
    基础集合保证不同调用之间的基数下限稳定，exclude 中的字符会被剔除。
    """
    excluded = set(exclude)
    ordered = dict.fromkeys(Alphabets.ALPHANUMERIC + "".join(extra) + text)
    return Alphabet("".join(ch for ch in ordered if ch not in excluded))
