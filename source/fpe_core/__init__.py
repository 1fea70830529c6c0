"""
格式保留匿名化工具 - 核心功能模块
提供 FF3-1 加密、字母表、字符/正则保留适配层与常用匿名化器
"""

from .alphabet import (
    Alphabet,
    derive_alphabet,
    DEFAULT,
    DIGITS,
    LOWER_ALPHA,
    UPPER_ALPHA,
    ALPHANUMERIC,
    EMAIL,
)
from .ff3 import FF3Cipher, encrypt, decrypt
from .anonymizer import BaseAnonymizer, PreserveMode
from .anonymizers import (
    StringAnonymizer,
    NumberStringAnonymizer,
    PersonalIdentifierAnonymizer,
    EmailAnonymizer,
    NameAnonymizer,
    PreservePattern,
    PREDEFINED_PATTERNS,
)
from .keys import (
    KeyTweakPair,
    derive_key,
    derive_key_tweak_pair,
    generate_key_tweak_pair,
    new_salt,
)
from .constants import Alphabets, Config, Tweaks
from .errors import (
    FPEError,
    DomainLengthError,
    InvalidSymbolError,
    OutOfRangeError,
    InvalidTweakLengthError,
    InvalidKeyLengthError,
    InvalidAlphabetError,
    InvalidPatternError,
    RepresentabilityError,
)

__all__ = [
    # 字母表
    "Alphabet",
    "derive_alphabet",
    "DEFAULT",
    "DIGITS",
    "LOWER_ALPHA",
    "UPPER_ALPHA",
    "ALPHANUMERIC",
    "EMAIL",
    # 加密引擎
    "FF3Cipher",
    "encrypt",
    "decrypt",
    # 保留适配层
    "BaseAnonymizer",
    "PreserveMode",
    # 匿名化器
    "StringAnonymizer",
    "NumberStringAnonymizer",
    "PersonalIdentifierAnonymizer",
    "EmailAnonymizer",
    "NameAnonymizer",
    "PreservePattern",
    "PREDEFINED_PATTERNS",
    # 密钥材料
    "KeyTweakPair",
    "derive_key",
    "derive_key_tweak_pair",
    "generate_key_tweak_pair",
    "new_salt",
    # 常量
    "Alphabets",
    "Config",
    "Tweaks",
    # 异常
    "FPEError",
    "DomainLengthError",
    "InvalidSymbolError",
    "OutOfRangeError",
    "InvalidTweakLengthError",
    "InvalidKeyLengthError",
    "InvalidAlphabetError",
    "InvalidPatternError",
    "RepresentabilityError",
]
