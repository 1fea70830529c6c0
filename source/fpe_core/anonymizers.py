"""
常用数据类型的匿名化器
都是对 BaseAnonymizer 的配置，核心加密逻辑不在这里
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .alphabet import DIGITS, LOWER_ALPHA
from .anonymizer import BaseAnonymizer
from .constants import Alphabets
from .ff3 import FF3Cipher


@dataclass
class PreservePattern:
    """保留正则配置"""
    name: str
    pattern: str
    description: str = ""


# 预定义证件号格式
PREDEFINED_PATTERNS: Dict[str, PreservePattern] = {
    "romanian_cnp": PreservePattern(
        name="romanian_cnp",
        pattern=r"^(\d{6})(\d{7})$",
        description="罗马尼亚个人识别码 CNP，13 位，前 6 位与后 7 位分别加密"
    ),
    "ssn": PreservePattern(
        name="ssn",
        pattern=r"^(\d{5})(\d{4})$",
        description="美国社会安全号 SSN，9 位，前 5 位与后 4 位分别加密"
    ),
}


class StringAnonymizer(BaseAnonymizer):
    """通用文本，默认保留空白和标点"""

    def __init__(self, cipher: FF3Cipher):
        super().__init__(cipher)
        self._preserve_spaces = True
        self._preserve_punctuation = True
        self._refresh()

    def set_preserve_spaces(self, preserve: bool):
        self._preserve_spaces = preserve
        self._refresh()

    def set_preserve_punctuation(self, preserve: bool):
        self._preserve_punctuation = preserve
        self._refresh()

    def _refresh(self):
        chars = set()
        if self._preserve_spaces:
            chars.update(" \t\n")
        if self._preserve_punctuation:
            chars.update(Alphabets.PUNCTUATION.strip())
        self.set_preserve_characters(chars)


class NumberStringAnonymizer(BaseAnonymizer):
    """纯数字字符串，在十进制字母表上加密"""

    def __init__(self, cipher: FF3Cipher):
        super().__init__(cipher.with_custom_alphabet(DIGITS))

    def anonymize_with_stats(self, text: str) -> Tuple[str, dict]:
        if not DIGITS.contains(text):
            raise ValueError("输入包含非数字字符")
        return super().anonymize_with_stats(text)


class PersonalIdentifierAnonymizer(BaseAnonymizer):
    """证件号，通过预定义正则只加密各个字段"""

    def configure(self, name: str):
        """按名称套用预定义格式"""
        try:
            preset = PREDEFINED_PATTERNS[name]
        except KeyError:
            raise ValueError(f"未知的证件号格式：{name}") from None
        self.set_preserve_pattern(preset.pattern)

    def configure_for_romanian_cnp(self):
        self.configure("romanian_cnp")

    def configure_for_ssn(self):
        self.configure("ssn")


class EmailAnonymizer(BaseAnonymizer):
    """电子邮箱，@ 作为字面量保留，默认保留域名和点号"""

    group_symbols = Alphabets.EMAIL_SYMBOLS

    def __init__(self, cipher: FF3Cipher):
        super().__init__(cipher)
        self._preserve_domain = True
        self._preserve_dots = True
        self._preserve_underscores = False
        self._refresh()

    def set_preserve_domain(self, preserve: bool):
        self._preserve_domain = preserve
        self._refresh()

    def set_preserve_dots(self, preserve: bool):
        self._preserve_dots = preserve
        self._refresh()

    def set_preserve_underscores(self, preserve: bool):
        self._preserve_underscores = preserve
        self._refresh()

    def _refresh(self):
        if self._preserve_domain:
            self.set_preserve_pattern(r"^([^@\s]+)@[^@\s]+$")
        else:
            self.set_preserve_pattern(r"^([^@\s]+)@([^@\s]+)$")

        chars = set()
        if self._preserve_dots:
            chars.add(".")
        if self._preserve_underscores:
            chars.add("_")
        self.set_preserve_characters(chars)


class NameAnonymizer(BaseAnonymizer):
    """人名，按空格分词，小写字母表加密，可保留首字母大写"""

    def __init__(self, cipher: FF3Cipher):
        super().__init__(cipher.with_custom_alphabet(LOWER_ALPHA))
        self._preserve_capitalization = True

    def set_preserve_capitalization(self, preserve: bool):
        self._preserve_capitalization = preserve

    def anonymize(self, name: str) -> str:
        return " ".join(self._transform_part(part, self._cipher.encrypt) for part in name.split(" "))

    def deanonymize(self, name: str) -> str:
        return " ".join(self._transform_part(part, self._cipher.decrypt) for part in name.split(" "))

    def anonymize_with_stats(self, name: str) -> Tuple[str, dict]:
        result = self.anonymize(name)
        return result, self._name_stats(name)

    def deanonymize_with_stats(self, name: str) -> Tuple[str, dict]:
        result = self.deanonymize(name)
        return result, self._name_stats(name)

    def _name_stats(self, name: str) -> dict:
        parts = [part for part in name.split(" ") if part]
        return {"mode": "name", "segments": len(parts), "fallbacks": 0, "unchanged": 0}

    def _transform_part(self, part: str, step) -> str:
        if not part:
            return part
        result = step(part.lower())
        if self._preserve_capitalization and part[0].isupper():
            return result[0].upper() + result[1:]
        return result
