"""
密钥与 tweak 生成模块
随机生成或从密码派生 FF3-1 所需的密钥材料
"""

import os
from dataclasses import dataclass

try:
    from cryptography.hazmat.primitives import hashes
    from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
except ImportError:
    raise ImportError(
        "缺少依赖库 cryptography，请先安装：pip install cryptography"
    )

from .constants import Config


@dataclass(frozen=True)
class KeyTweakPair:
    """密钥与 tweak 组合"""
    label: str
    key: bytes
    tweak: bytes

    @property
    def key_hex(self) -> str:
        return self.key.hex()

    @property
    def tweak_hex(self) -> str:
        return self.tweak.hex()


def new_salt() -> bytes:
    """生成随机盐值"""
    return os.urandom(Config.SALT_LENGTH)


def _pbkdf2(password: str, salt: bytes, length: int) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=length,
        salt=salt,
        iterations=Config.PBKDF2_ITERATIONS,
    )
    return kdf.derive(password.encode("utf-8"))


def derive_key(password: str, salt: bytes) -> bytes:
    """从密码派生加密密钥"""
    return _pbkdf2(password, salt, Config.KEY_LENGTH)


def derive_key_tweak_pair(password: str, salt: bytes, label: str = "default") -> KeyTweakPair:
    """一次派生同时得到密钥和 tweak，相同密码与盐值结果相同"""
    material = _pbkdf2(password, salt, Config.KEY_LENGTH + Config.TWEAK_LENGTH)
    return KeyTweakPair(
        label=label,
        key=material[:Config.KEY_LENGTH],
        tweak=material[Config.KEY_LENGTH:],
    )


def generate_key_tweak_pair(label: str = "default") -> KeyTweakPair:
    """随机生成 256 位密钥和 56 位 tweak"""
    return KeyTweakPair(
        label=label,
        key=os.urandom(Config.KEY_LENGTH),
        tweak=os.urandom(Config.TWEAK_LENGTH),
    )
