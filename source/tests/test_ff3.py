"""
FF3-1 加密引擎单元测试
"""

import os
from concurrent.futures import ThreadPoolExecutor

import pytest
from fpe_core import (
    Alphabet,
    FF3Cipher,
    encrypt,
    decrypt,
    ALPHANUMERIC,
    DIGITS,
    LOWER_ALPHA,
    Tweaks,
    DomainLengthError,
    InvalidAlphabetError,
    InvalidKeyLengthError,
    InvalidSymbolError,
    InvalidTweakLengthError,
)
from fpe_core.ff3 import expand_tweak

KEY = bytes.fromhex("ef4359d8d580aa4f7f036d6f04fc6a94")
TWEAK = Tweaks.DEFAULT

# NIST ACVP AES-FF3-1 样例（AES-128）
ACVP_VECTORS = [
    (DIGITS, "2DE79D232DF5585D68CE47882AE256D6", "CBD09280979564", "3992520240", "8901801106"),
    (LOWER_ALPHA, "718385E6542534604419E83CE387A437", "B6F35084FA90E1", "wfmwlrorcd", "ywowehycyd"),
]


class TestKnownAnswer:
    """测试标准样例"""

    @pytest.mark.parametrize("alphabet, key, tweak, plaintext, ciphertext", ACVP_VECTORS)
    def test_encrypt(self, alphabet, key, tweak, plaintext, ciphertext):
        """测试加密得到样例密文"""
        assert FF3Cipher(key, tweak, alphabet).encrypt(plaintext) == ciphertext

    @pytest.mark.parametrize("alphabet, key, tweak, plaintext, ciphertext", ACVP_VECTORS)
    def test_decrypt(self, alphabet, key, tweak, plaintext, ciphertext):
        """测试解密得到样例明文"""
        assert FF3Cipher(key, tweak, alphabet).decrypt(ciphertext) == plaintext


class TestRoundTrip:
    """测试加密解密往返"""

    def test_digits(self):
        """测试十进制"""
        cipher = FF3Cipher(KEY, TWEAK, DIGITS)
        plaintext = "890121234567890000"
        ciphertext = cipher.encrypt(plaintext)
        assert ciphertext != plaintext
        assert cipher.decrypt(ciphertext) == plaintext

    def test_alphanumeric(self):
        """测试字母数字"""
        cipher = FF3Cipher(KEY, TWEAK)
        plaintext = "abcdefghij123523565"
        assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext

    def test_odd_length(self):
        """测试奇数长度（两半不等长）"""
        cipher = FF3Cipher(KEY, TWEAK, LOWER_ALPHA)
        plaintext = "abcdefghijk"
        assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext

    def test_boundary_lengths(self):
        """测试最小与最大长度"""
        cipher = FF3Cipher(KEY, TWEAK, DIGITS)
        for plaintext in ("123", "9" * 56):
            assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext

    def test_binary_radix(self):
        """测试二进制"""
        cipher = FF3Cipher(KEY, TWEAK, Alphabet("01"))
        plaintext = "1011001110001011"
        assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext

    def test_radix_above_16_bits(self):
        """测试基数超过 2^16"""
        big = Alphabet("".join(chr(0x10000 + i) for i in range(70000)))
        cipher = FF3Cipher(KEY, TWEAK, big)
        plaintext = "".join(big.symbol_at(i * 9973) for i in range(7))
        ciphertext = cipher.encrypt(plaintext)
        assert len(ciphertext) == 7
        assert cipher.decrypt(ciphertext) == plaintext

    @pytest.mark.parametrize("key_length", [16, 24, 32])
    def test_key_lengths(self, key_length):
        """测试三种 AES 密钥长度"""
        key = os.urandom(key_length)
        tweak = os.urandom(7)
        cipher = FF3Cipher(key, tweak, DIGITS)
        assert cipher.decrypt(cipher.encrypt("4000123412341234")) == "4000123412341234"

    def test_hex_key_and_tweak(self):
        """测试十六进制字符串形式的密钥和 tweak"""
        by_bytes = FF3Cipher(KEY, TWEAK, DIGITS)
        by_hex = FF3Cipher(KEY.hex(), TWEAK.hex(), DIGITS)
        assert by_bytes.encrypt("1234567890") == by_hex.encrypt("1234567890")

    def test_module_functions(self):
        """测试模块级接口"""
        ciphertext = encrypt(DIGITS, KEY, TWEAK, "0123456789")
        assert ciphertext == FF3Cipher(KEY, TWEAK, DIGITS).encrypt("0123456789")
        assert decrypt(DIGITS, KEY, TWEAK, ciphertext) == "0123456789"


class TestFormatPreservation:
    """测试长度与字母表保持"""

    def test_same_length_and_alphabet(self):
        """测试密文长度和字符集合"""
        cipher = FF3Cipher(KEY, TWEAK, LOWER_ALPHA)
        for plaintext in ("abc", "hello", "thequickbrownfox"):
            ciphertext = cipher.encrypt(plaintext)
            assert len(ciphertext) == len(plaintext)
            assert LOWER_ALPHA.contains(ciphertext)

    def test_deterministic(self):
        """测试相同输入得到相同密文"""
        cipher = FF3Cipher(KEY, TWEAK, DIGITS)
        assert cipher.encrypt("5550198415") == cipher.encrypt("5550198415")
        assert FF3Cipher(KEY, TWEAK, DIGITS).encrypt("5550198415") == cipher.encrypt("5550198415")

    def test_tweak_changes_output(self):
        """测试不同 tweak 产生不同密文"""
        first = FF3Cipher(KEY, TWEAK, DIGITS).encrypt("12345678901234")
        second = FF3Cipher(KEY, bytes(7), DIGITS).encrypt("12345678901234")
        assert first != second

    def test_concurrent_calls_identical(self):
        """测试多线程共享加密器结果一致"""
        cipher = FF3Cipher(KEY, TWEAK, ALPHANUMERIC)
        expected = cipher.encrypt("concurrency42")
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(cipher.encrypt, ["concurrency42"] * 32))
        assert set(results) == {expected}


class TestPreconditions:
    """测试前置条件校验"""

    def test_too_short(self):
        """测试长度低于下限"""
        cipher = FF3Cipher(KEY, TWEAK, DIGITS)
        with pytest.raises(DomainLengthError):
            cipher.encrypt("12")
        with pytest.raises(DomainLengthError):
            cipher.decrypt("12")

    def test_too_long(self):
        """测试长度超过上限"""
        cipher = FF3Cipher(KEY, TWEAK, DIGITS)
        with pytest.raises(DomainLengthError):
            cipher.encrypt("1" * 57)

    def test_invalid_symbol(self):
        """测试字母表外的字符"""
        cipher = FF3Cipher(KEY, TWEAK, DIGITS)
        with pytest.raises(InvalidSymbolError):
            cipher.encrypt("12a45")
        with pytest.raises(InvalidSymbolError):
            cipher.decrypt("12-45")

    @pytest.mark.parametrize("length", [0, 6, 8])
    def test_tweak_length(self, length):
        """测试 tweak 必须为 7 字节"""
        with pytest.raises(InvalidTweakLengthError):
            FF3Cipher(KEY, bytes(length))

    def test_key_length(self):
        """测试非法密钥长度"""
        with pytest.raises(InvalidKeyLengthError):
            FF3Cipher(bytes(10), TWEAK)

    def test_bad_hex(self):
        """测试非法十六进制"""
        with pytest.raises(ValueError):
            FF3Cipher("zz" * 16, TWEAK)


class TestCustomAlphabet:
    """测试自定义字母表"""

    def test_with_custom_alphabet(self):
        """测试绑定到新字母表"""
        cipher = FF3Cipher(KEY, TWEAK).with_custom_alphabet("abcdef")
        assert cipher.alphabet.radix == 6
        ciphertext = cipher.encrypt("fedcbafedc")
        assert set(ciphertext) <= set("abcdef")
        assert cipher.decrypt(ciphertext) == "fedcbafedc"

    def test_original_cipher_unchanged(self):
        """测试原加密器不受影响"""
        cipher = FF3Cipher(KEY, TWEAK)
        cipher.with_custom_alphabet(DIGITS)
        assert cipher.alphabet == ALPHANUMERIC

    def test_deduplicated_candidate(self):
        """测试候选字母表先去重"""
        cipher = FF3Cipher(KEY, TWEAK).with_custom_alphabet("0011223344556677889")
        assert cipher.alphabet.symbols == "0123456789"

    def test_too_few_symbols(self):
        """测试不足两个不同字符"""
        with pytest.raises(InvalidAlphabetError):
            FF3Cipher(KEY, TWEAK).with_custom_alphabet("aaaa")


class TestTweakExpansion:
    """测试 56 位 tweak 扩展"""

    def test_expand(self):
        """测试第 4 字节拆分到左右两半"""
        expanded = expand_tweak(bytes.fromhex("000000ab000000"))
        assert expanded == bytes.fromhex("000000a0000000b0")

    def test_length(self):
        """测试扩展后为 8 字节"""
        assert len(expand_tweak(TWEAK)) == 8


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
