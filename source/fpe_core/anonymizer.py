"""
保留适配层
在 FF3-1 之上处理字母表之外的字符：派生自定义字母表、剥离并回填保留字符、
只加密正则捕获组，以及无法加密时的降级处理
"""

import logging
import re
from enum import Enum
from typing import Iterable, Optional, Pattern, Tuple, Union

from .alphabet import DEFAULT, DIGITS, Alphabet, derive_alphabet
from .constants import Alphabets, Config
from .errors import (
    DomainLengthError,
    InvalidAlphabetError,
    InvalidPatternError,
    RepresentabilityError,
)
from .ff3 import FF3Cipher
from .preservation import (
    capture_spans,
    find_preserved,
    is_numeric,
    pad,
    replace_spans,
    sanitize,
    splice_preserved,
    strip_preserved,
)

logger = logging.getLogger(__name__)


class PreserveMode(Enum):
    """保留模式枚举"""
    NONE = "none"  # 直接调用加密器
    CHARACTERS = "characters"  # 保留指定字符的位置
    PATTERN = "pattern"  # 只加密正则捕获组
    COMBINED = "combined"  # 先剥离字符，再按正则处理


class BaseAnonymizer:
    """可逆匿名化基类，配置之外不保存任何跨调用状态"""

    # 派生字母表时固定附加的字符集
    group_symbols = Alphabets.PUNCTUATION

    def __init__(self, cipher: FF3Cipher):
        self._cipher = cipher
        self._preserve_chars = frozenset()
        self._preserve_pattern: Optional[Pattern] = None

    # ============= 配置 =============

    def set_preserve_characters(self, characters: Iterable[str]):
        """设置位置保持不变的字符"""
        self._preserve_chars = frozenset(characters or ())

    def set_preserve_pattern(self, pattern: Union[str, Pattern, None]):
        """设置保留正则，至少包含一个捕获组；传入空值则清除"""
        if not pattern:
            self._preserve_pattern = None
            return
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise InvalidPatternError(f"正则无法编译：{e}") from e
        if compiled.groups < 1:
            raise InvalidPatternError("保留正则至少需要一个捕获组")
        self._preserve_pattern = compiled

    @property
    def preserve_mode(self) -> PreserveMode:
        if self._preserve_chars and self._preserve_pattern is not None:
            return PreserveMode.COMBINED
        if self._preserve_pattern is not None:
            return PreserveMode.PATTERN
        if self._preserve_chars:
            return PreserveMode.CHARACTERS
        return PreserveMode.NONE

    # ============= 公共接口 =============

    def anonymize(self, text: str) -> str:
        """匿名化"""
        return self.anonymize_with_stats(text)[0]

    def deanonymize(self, text: str) -> str:
        """还原"""
        return self.deanonymize_with_stats(text)[0]

    def anonymize_with_stats(self, text: str) -> Tuple[str, dict]:
        """匿名化并返回统计：处理片段数、降级次数、原样返回的片段数"""
        return self._run(text, encrypting=True)

    def deanonymize_with_stats(self, text: str) -> Tuple[str, dict]:
        """还原并返回统计"""
        return self._run(text, encrypting=False)

    # ============= 内部流程 =============

    def _run(self, text: str, encrypting: bool) -> Tuple[str, dict]:
        mode = self.preserve_mode
        stats = {"mode": mode.value, "segments": 0, "fallbacks": 0, "unchanged": 0}

        if mode is PreserveMode.NONE:
            stats["segments"] = 1
            if encrypting:
                return self._cipher.encrypt(text), stats
            return self._cipher.decrypt(text), stats

        if mode is PreserveMode.PATTERN:
            return self._transform_pattern(text, encrypting, stats), stats

        positions = find_preserved(text, self._preserve_chars)
        stripped = strip_preserved(text, positions)
        if not stripped:
            return text, stats

        if mode is PreserveMode.COMBINED:
            body = self._transform_pattern(stripped, encrypting, stats)
        else:
            body = self._transform_segment(stripped, encrypting, stats, extra=self.group_symbols)
        return splice_preserved(body, positions), stats

    def _transform_pattern(self, text: str, encrypting: bool, stats: dict) -> str:
        match = self._preserve_pattern.search(text)
        if match is None:
            logger.debug("保留正则未匹配，整体处理长度为 %d 的文本", len(text))
            return self._transform_segment(
                text, encrypting, stats, extra=self.group_symbols, numeric_aware=True
            )

        replacements = []
        for start, end in capture_spans(match):
            value = self._transform_segment(
                text[start:end], encrypting, stats, extra=self.group_symbols, numeric_aware=True
            )
            replacements.append(((start, end), value))
        return replace_spans(text, replacements)

    def _transform_segment(
        self,
        text: str,
        encrypting: bool,
        stats: dict,
        extra: str = "",
        numeric_aware: bool = False,
    ) -> str:
        """用派生字母表处理单个片段，失败时降级"""
        if not text:
            return text
        stats["segments"] += 1

        walk = numeric_aware and not is_numeric(text)
        try:
            alphabet = self._segment_alphabet(text, extra, numeric_aware)
            return self._apply(alphabet, text, encrypting, walk)
        except RepresentabilityError as e:
            stats["fallbacks"] += 1
            logger.warning("派生字母表无法处理该片段，改用默认字母表：%s", e)

        return self._fallback(text, encrypting, stats, numeric_aware)

    def _segment_alphabet(self, text: str, extra: str, numeric_aware: bool) -> Alphabet:
        # 纯数字片段使用数字字母表，密文仍是数字，还原时能选到同一个字母表
        if numeric_aware and is_numeric(text) and not self._preserve_chars.intersection(DIGITS.symbols):
            return DIGITS
        try:
            return derive_alphabet(text, extra, exclude=self._preserve_chars)
        except InvalidAlphabetError as e:
            raise RepresentabilityError(str(e)) from e

    def _apply(self, alphabet: Alphabet, text: str, encrypting: bool, walk: bool) -> str:
        """
        填充、加解密、截断。

        walk 为真时使用循环游走：非数字片段的结果若恰好全是数字就继续加密
        （解密同理），保证还原时按同样规则选出同一字母表。
        """
        n = len(text)
        if not alphabet.is_usable or n > alphabet.max_length:
            raise RepresentabilityError(
                f"长度 {n} 超出 radix={alphabet.radix} 的上限 {alphabet.max_length}"
            )

        filler = Config.FILLER if Config.FILLER in alphabet else alphabet.symbol_at(0)
        cipher = self._cipher.with_custom_alphabet(alphabet)
        step = cipher.encrypt if encrypting else cipher.decrypt

        result = step(pad(text, alphabet.min_length, filler))
        while walk and is_numeric(result[:n]):
            result = step(result)
        return result[:n]

    def _fallback(self, text: str, encrypting: bool, stats: dict, numeric_aware: bool) -> str:
        """替换不可表示字符后用默认字母表重试；仍失败时加密抛错、解密原样返回"""
        try:
            alphabet = Alphabet.from_symbols(
                ch for ch in DEFAULT.symbols if ch not in self._preserve_chars
            )
            sentinel = Config.SENTINEL if Config.SENTINEL in alphabet else alphabet.symbol_at(0)
            sanitized = sanitize(text, alphabet, sentinel)
            walk = numeric_aware and not is_numeric(sanitized)
            return self._apply(alphabet, sanitized, encrypting, walk)
        except (InvalidAlphabetError, RepresentabilityError) as e:
            if encrypting:
                raise DomainLengthError(f"片段无法加密：{e}") from e
            stats["unchanged"] += 1
            logger.warning("片段无法还原，原样返回：%s", e)
            return text
