"""
常量定义模块
FF3-1 参数、预定义字母表与默认 tweak
"""

import string


class Config:
    """加密配置常量"""
    NUM_ROUNDS = 8
    BLOCK_SIZE = 16  # AES 分组长度（字节）
    TWEAK_LENGTH = 7  # FF3-1 tweak 为 56 位
    HALF_TWEAK_LENGTH = 4
    KEY_LENGTHS = (16, 24, 32)
    NUMERAL_BYTES = 12  # 轮函数输入中数值部分占 96 位
    MIN_DOMAIN_SIZE = 100
    MAX_DOMAIN_BITS = 96

    # 保留适配层
    FILLER = "A"  # 长度不足时的右侧填充字符
    SENTINEL = "X"  # 降级时替换不可表示字符

    # 密钥派生
    SALT_LENGTH = 16
    PBKDF2_ITERATIONS = 120000
    KEY_LENGTH = 32


class Alphabets:
    """预定义字母表"""
    DIGITS = string.digits
    LOWER_ALPHA = string.ascii_lowercase
    UPPER_ALPHA = string.ascii_uppercase
    ALPHANUMERIC = string.digits + string.ascii_lowercase + string.ascii_uppercase
    PUNCTUATION = string.punctuation + " "
    EMAIL_SYMBOLS = "._-+"
    EMAIL = ALPHANUMERIC + EMAIL_SYMBOLS

    DEFAULT = ALPHANUMERIC


class Tweaks:
    """默认 tweak（56 位）"""
    DEFAULT = bytes.fromhex("d8e7920afa330a")
