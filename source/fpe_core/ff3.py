"""
FF3-1 格式保留加密模块
NIST SP 800-38G Rev.1，8 轮 Feistel，AES 单分组作为轮函数

    u 长度  |  v 长度
    A 半块  |  B 半块
        C <- (NUM(REV(A)) + y) mod radix^m
    B' <- C |  A' <- B
"""

import logging
from typing import Iterable, Union

try:
    from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
except ImportError:
    raise ImportError(
        "缺少依赖库 cryptography，请先安装：pip install cryptography"
    )

from .alphabet import DEFAULT, Alphabet
from .constants import Config
from .errors import (
    DomainLengthError,
    InvalidKeyLengthError,
    InvalidTweakLengthError,
)

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, str]


def _to_bytes(value: BytesLike, what: str) -> bytes:
    """接受原始字节或十六进制字符串"""
    if isinstance(value, str):
        try:
            return bytes.fromhex(value)
        except ValueError as e:
            raise ValueError(f"{what} 不是合法的十六进制字符串") from e
    return bytes(value)


def expand_tweak(tweak: bytes) -> bytes:
    """56 位 tweak 扩展为 64 位：T_L = T[0..27] || 0^4，T_R = T[32..55] || T[28..31] || 0^4"""
    return bytes([
        tweak[0],
        tweak[1],
        tweak[2],
        tweak[3] & 0xF0,
        tweak[4],
        tweak[5],
        tweak[6],
        (tweak[3] & 0x0F) << 4,
    ])


def aes_ecb_encrypt(key: bytes, block: bytes) -> bytes:
    """单分组 AES-ECB 加密"""
    encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    return encryptor.update(block) + encryptor.finalize()


class FF3Cipher:
    """绑定密钥、tweak 与字母表的 FF3-1 加密器，实例不可变"""

    def __init__(self, key: BytesLike, tweak: BytesLike, alphabet: Alphabet = DEFAULT):
        key_bytes = _to_bytes(key, "密钥")
        tweak_bytes = _to_bytes(tweak, "tweak")

        if len(key_bytes) not in Config.KEY_LENGTHS:
            raise InvalidKeyLengthError(
                f"密钥长度为 {len(key_bytes)} 字节，必须是 128、192 或 256 位"
            )
        if len(tweak_bytes) != Config.TWEAK_LENGTH:
            raise InvalidTweakLengthError(
                f"tweak 长度为 {len(tweak_bytes)} 字节，FF3-1 要求 {Config.TWEAK_LENGTH * 8} 位"
            )

        self._key = key_bytes
        # FF3-1 以字节反转后的密钥调用 AES
        self._round_key = key_bytes[::-1]
        self._tweak = tweak_bytes
        self._alphabet = alphabet

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def tweak(self) -> bytes:
        return self._tweak

    def with_custom_alphabet(self, symbols: Union[str, Iterable[str], Alphabet]) -> "FF3Cipher":
        """返回绑定到自定义字母表的新加密器"""
        return FF3Cipher(self._key, self._tweak, Alphabet.from_symbols(symbols))

    def encrypt(self, plaintext: str) -> str:
        """加密，密文与明文等长且字符来自同一字母表"""
        return self._feistel(plaintext, encrypting=True)

    def decrypt(self, ciphertext: str) -> str:
        """
        解密。与加密的差别只有两点：模加换成模减，轮次倒序执行。
        """
        return self._feistel(ciphertext, encrypting=False)

    def _check_domain(self, text: str):
        n = len(text)
        alphabet = self._alphabet
        if n < alphabet.min_length or n > alphabet.max_length:
            raise DomainLengthError(
                f"长度 {n} 不在 [{alphabet.min_length}, {alphabet.max_length}] 范围内"
                f"（radix={alphabet.radix}）"
            )
        for ch in text:
            alphabet.index_of(ch)

    def _round_value(self, i: int, half_tweak: bytes, half: str) -> int:
        """轮函数：P = (W xor [i]^4) || [NUM(REV(half))]^12，y = NUM(REV(CIPH(REV(P))))"""
        block = bytearray(Config.BLOCK_SIZE)
        block[:Config.HALF_TWEAK_LENGTH] = half_tweak
        block[Config.HALF_TWEAK_LENGTH - 1] ^= i
        numeral = self._alphabet.decode(half[::-1])
        block[Config.HALF_TWEAK_LENGTH:] = numeral.to_bytes(Config.NUMERAL_BYTES, "big")

        output = aes_ecb_encrypt(self._round_key, bytes(block[::-1]))
        return int.from_bytes(output[::-1], "big")

    def _feistel(self, text: str, encrypting: bool) -> str:
        self._check_domain(text)

        n = len(text)
        u = (n + 1) // 2
        v = n - u
        a, b = text[:u], text[u:]

        tweak64 = expand_tweak(self._tweak)
        tweak_left = tweak64[:Config.HALF_TWEAK_LENGTH]
        tweak_right = tweak64[Config.HALF_TWEAK_LENGTH:]

        radix = self._alphabet.radix
        modulus = {u: radix ** u, v: radix ** v}

        rounds = range(Config.NUM_ROUNDS)
        if not encrypting:
            rounds = reversed(rounds)

        for i in rounds:
            if i % 2 == 0:
                m, w = u, tweak_right
            else:
                m, w = v, tweak_left

            if encrypting:
                y = self._round_value(i, w, b)
                c = (self._alphabet.decode(a[::-1]) + y) % modulus[m]
                a, b = b, self._alphabet.encode(c, m)[::-1]
            else:
                y = self._round_value(i, w, a)
                c = (self._alphabet.decode(b[::-1]) - y) % modulus[m]
                a, b = self._alphabet.encode(c, m)[::-1], a

        logger.debug("FF3-1 %s n=%d radix=%d", "encrypt" if encrypting else "decrypt", n, radix)
        return a + b


def encrypt(alphabet: Alphabet, key: BytesLike, tweak: BytesLike, plaintext: str) -> str:
    """以指定字母表加密"""
    return FF3Cipher(key, tweak, alphabet).encrypt(plaintext)


def decrypt(alphabet: Alphabet, key: BytesLike, tweak: BytesLike, ciphertext: str) -> str:
    """以指定字母表解密"""
    return FF3Cipher(key, tweak, alphabet).decrypt(ciphertext)
