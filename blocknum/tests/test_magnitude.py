"""
Unit tests for UnsignedMagnitude.

Python big ints are the reference.  Besides the arithmetic laws this
covers the bit-level API (get/set/get_bits/shift_out), native and float
conversion, numpy block arrays and the operator layer.
"""

import unittest
import random
import copy
import math
import sys
import os

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from blocknum import blocks as kernel
from blocknum.magnitude import UnsignedMagnitude
from blocknum.errors import (
    BitRangeError, NegativeValueError, NonFiniteError, UnderflowError, ValueTooLargeError,
)


def mag(value: int) -> UnsignedMagnitude:
    """Build from an arbitrary Python int through the hex parser."""
    return UnsignedMagnitude.from_hex_str(format(value, "X"))


def rand_int(rng, max_bits=256):
    return rng.getrandbits(rng.randint(0, max_bits))


class TestScenarios(unittest.TestCase):
    """Fixed examples."""

    def test_add(self):
        res = UnsignedMagnitude.from_u64(10).add_to(UnsignedMagnitude.from_u64(20))
        self.assertEqual(res, UnsignedMagnitude.from_u64(30))

    def test_shift_out_single_block(self):
        value = UnsignedMagnitude.from_u64(0x823456789ABCDEF0)
        top = value.shift_out(16)
        self.assertEqual(top.to_u64(), 0x8234)
        self.assertEqual(value.to_u64(), 0x56789ABCDEF0)

    def test_shift_out_short_value(self):
        value = UnsignedMagnitude.from_u64(0x123456789ABCDEF0)
        top = value.shift_out(13)
        self.assertEqual(top.to_hex_string(), "1234")
        self.assertEqual(value.to_hex_string(), "56789ABCDEF0")

    def test_shift_out_two_blocks(self):
        raw = 0x123456789ABCDEF01234
        value = UnsignedMagnitude.from_u128(raw)
        top = value.shift_out(16)
        self.assertEqual(value.to_hex_string(), "16789ABCDEF01234")
        self.assertEqual(top.to_u64(), raw >> (raw.bit_length() - 16))

    def test_shift_out_everything(self):
        value = UnsignedMagnitude.from_u64(0xABC)
        top = value.shift_out(12)
        self.assertEqual(top.to_u64(), 0xABC)
        self.assertTrue(value.is_zero())

    def test_shift_out_too_many(self):
        with self.assertRaises(BitRangeError):
            UnsignedMagnitude.from_u64(0xFF).shift_out(9)

    def test_div_mod(self):
        q, r = UnsignedMagnitude.from_u64(0x80000000).div_mod(UnsignedMagnitude.from_u64(0x3000))
        self.assertEqual(q.to_u64(), 0x2AAAA)
        self.assertEqual(r.to_u64(), 0x2000)

    def test_dec_string(self):
        self.assertEqual(UnsignedMagnitude.from_u64(0xAB54A98F81652440).to_dec_string(),
                         "12345678912345678912")
        self.assertEqual(UnsignedMagnitude().to_dec_string(), "0")

    def test_get_bits_across_blocks(self):
        value = UnsignedMagnitude.from_u128(0xF0F0F0F0F0F0F0F0F0F0F0F0F0F0F0F0)
        self.assertEqual(value.get_bits(94, 64).to_u64(), 0xE1E1E1E1E1E1E1E1)

    def test_repr(self):
        self.assertEqual(repr(UnsignedMagnitude.from_u64(30)), "(L:5,0x1E)")
        self.assertEqual(repr(UnsignedMagnitude()), "(L:0,0x0)")
        self.assertEqual(str(UnsignedMagnitude.from_u64(30)), "30")


class TestArithmeticLaws(unittest.TestCase):
    """Properties against Python big-int reference across 1..4+ blocks."""

    def setUp(self):
        self.rng = random.Random(42)

    def check_canonical(self, value):
        self.assertTrue(kernel.is_canonical(list(value.blocks)))
        self.assertEqual(value.length, int(value).bit_length())

    def test_add_commutative_associative(self):
        for _ in range(100):
            a, b, c = (rand_int(self.rng) for _ in range(3))
            ma, mb, mc = mag(a), mag(b), mag(c)
            self.assertEqual(ma + mb, mb + ma)
            self.assertEqual((ma + mb) + mc, ma + (mb + mc))
            self.assertEqual(int(ma + mb + mc), a + b + c)

    def test_mul_commutative_associative(self):
        for _ in range(50):
            a, b, c = (rand_int(self.rng, 150) for _ in range(3))
            ma, mb, mc = mag(a), mag(b), mag(c)
            self.assertEqual(ma * mb, mb * ma)
            self.assertEqual((ma * mb) * mc, ma * (mb * mc))
            self.assertEqual(int(ma * mb * mc), a * b * c)

    def test_identities(self):
        zero, one = UnsignedMagnitude.zero(), UnsignedMagnitude.one()
        for _ in range(50):
            a = mag(rand_int(self.rng))
            self.assertEqual(a + zero, a)
            self.assertEqual(a * one, a)
            self.assertTrue((a * zero).is_zero())
            self.assertTrue((a - a).is_zero())

    def test_add_sub_inverse(self):
        for _ in range(100):
            a, b = mag(rand_int(self.rng)), mag(rand_int(self.rng))
            res = (a + b) - b
            self.assertEqual(res, a)
            self.check_canonical(res)

    def test_sub_underflow(self):
        a, b = UnsignedMagnitude.from_u64(1), UnsignedMagnitude.from_u64(2)
        with self.assertRaises(UnderflowError):
            a.sub_into(b)
        self.assertEqual(a.to_u64(), 1)

    def test_division_law(self):
        for _ in range(60):
            a = rand_int(self.rng, 200)
            b = rand_int(self.rng, 130) or 1
            q, r = mag(a).div_mod(mag(b))
            self.assertEqual(q * mag(b) + r, mag(a))
            self.assertLess(r, mag(b))
            self.assertEqual((int(q), int(r)), divmod(a, b))
            self.check_canonical(q)
            self.check_canonical(r)

    def test_div_by_zero(self):
        with self.assertRaises(ZeroDivisionError):
            UnsignedMagnitude.from_u64(5).div_mod(UnsignedMagnitude())

    def test_gcd(self):
        for _ in range(60):
            common = rand_int(self.rng, 64) or 1
            a = rand_int(self.rng, 128) * common
            b = rand_int(self.rng, 128) * common
            g = mag(a).gcd(mag(b))
            self.assertEqual(int(g), math.gcd(a, b))

    def test_powi(self):
        self.assertEqual(UnsignedMagnitude.from_u64(3).powi(40), mag(3 ** 40))
        self.assertEqual(UnsignedMagnitude.from_u64(7).powi(0), UnsignedMagnitude.one())
        self.assertEqual(UnsignedMagnitude().powi(0), UnsignedMagnitude.one())

    def test_ordering(self):
        for _ in range(200):
            a, b = rand_int(self.rng), rand_int(self.rng)
            self.assertEqual(mag(a) < mag(b), a < b)
            self.assertEqual(mag(a) == mag(b), a == b)
            self.assertEqual(mag(a).compare(mag(b)), (a > b) - (a < b))

    def test_shifts(self):
        for _ in range(100):
            a = rand_int(self.rng)
            n = self.rng.randint(0, 150)
            self.assertEqual(int(mag(a) << n), a << n)
            self.assertEqual(int(mag(a) >> n), a >> n)

    def test_bitwise(self):
        for _ in range(100):
            a, b = rand_int(self.rng), rand_int(self.rng)
            self.assertEqual(int(mag(a) & mag(b)), a & b)
            self.assertEqual(int(mag(a) | mag(b)), a | b)


class TestInPlace(unittest.TestCase):
    """The *_into variants agree with the pure forms."""

    def test_in_place_ops(self):
        rng = random.Random(5)
        for _ in range(50):
            a, b = rand_int(rng), rand_int(rng) or 1
            ma, mb = mag(a), mag(b)

            x = ma.copy()
            x.add_into(mb)
            self.assertEqual(x, ma.add_to(mb))

            x = ma.copy()
            x.mul_into(mb)
            self.assertEqual(x, ma.mul_with(mb))

            x = ma.copy()
            rem = x.div_mod_into(mb)
            self.assertEqual((x, rem), ma.div_mod(mb))

            x = ma.copy()
            x.shift_left_into(70)
            self.assertEqual(x, ma.shift_left(70))
            x.shift_right_into(70)
            self.assertEqual(x, ma)

            x = ma.copy()
            x.and_into(mb)
            self.assertEqual(x, ma.bit_and(mb))

            x = ma.copy()
            x.or_into(mb)
            self.assertEqual(x, ma.bit_or(mb))

    def test_add_into_self(self):
        x = UnsignedMagnitude.from_u64(0xFFFFFFFFFFFFFFFF)
        x += x
        self.assertEqual(int(x), 0x1FFFFFFFFFFFFFFFE)

    def test_operators_in_place(self):
        x = UnsignedMagnitude.from_u64(100)
        x -= UnsignedMagnitude.from_u64(1)
        x //= UnsignedMagnitude.from_u64(9)
        x *= UnsignedMagnitude.from_u64(4)
        x <<= 2
        x >>= 1
        self.assertEqual(x.to_u64(), 88)

    def test_copy_is_independent(self):
        x = UnsignedMagnitude.from_u64(5)
        y = copy.copy(x)
        z = copy.deepcopy(x)
        x.add_into(UnsignedMagnitude.from_u64(1))
        self.assertEqual(y.to_u64(), 5)
        self.assertEqual(z.to_u64(), 5)

    def test_unhashable(self):
        with self.assertRaises(TypeError):
            hash(UnsignedMagnitude())


class TestBits(unittest.TestCase):
    """get / set / get_bits / iteration."""

    def test_get(self):
        value = UnsignedMagnitude.from_u64(0b1011)
        self.assertEqual([value.get(i) for i in range(4)], [True, True, False, True])
        self.assertIsNone(value.get(4))
        self.assertIsNone(value.get(100))

    def test_set_grows(self):
        value = UnsignedMagnitude.from_u64(0b1011)
        self.assertIsNone(value.set(100, True))
        self.assertEqual(value.length, 101)
        self.assertEqual(int(value), (1 << 100) | 0b1011)

    def test_set_clear_beyond_length(self):
        value = UnsignedMagnitude.from_u64(0b1011)
        self.assertIsNone(value.set(10, False))
        self.assertEqual(value.length, 4)

    def test_set_returns_previous(self):
        value = UnsignedMagnitude.from_u64(0b1011)
        self.assertTrue(value.set(0, False))
        self.assertFalse(value.set(2, True))
        self.assertEqual(value.to_u64(), 0b1110)

    def test_clear_top_bit_retrims(self):
        value = mag((1 << 64) + 5)
        self.assertTrue(value.set(64, False))
        self.assertEqual(value.blocks, (5,))
        self.assertEqual(value.length, 3)

        value = UnsignedMagnitude.from_u64(1)
        value.set(0, False)
        self.assertTrue(value.is_zero())
        self.assertEqual(value.blocks, ())

    def test_get_bits_random(self):
        rng = random.Random(9)
        for _ in range(100):
            v = rng.getrandbits(200) | (1 << 199)
            start = rng.randint(0, 199)
            count = rng.randint(0, start + 1)
            got = mag(v).get_bits(start, count)
            want = (v >> (start + 1 - count)) & ((1 << count) - 1)
            self.assertEqual(int(got), want)

    def test_get_bits_out_of_range(self):
        value = UnsignedMagnitude.from_u64(0xFF)
        with self.assertRaises(BitRangeError):
            value.get_bits(8, 1)
        with self.assertRaises(BitRangeError):
            value.get_bits(3, 5)
        with self.assertRaises(BitRangeError):
            UnsignedMagnitude().get_bits(0, 0)

    def test_iter_bits(self):
        self.assertEqual(list(UnsignedMagnitude.from_u64(0b1101)), [True, True, False, True])
        self.assertEqual(list(UnsignedMagnitude()), [])

    def test_parity_and_trailing_zeros(self):
        self.assertTrue(UnsignedMagnitude().is_even())
        self.assertTrue(UnsignedMagnitude.from_u64(3).is_odd())
        self.assertEqual(mag(1 << 130).trailing_zeros(), 130)


class TestConversions(unittest.TestCase):
    """Native, string, float and numpy conversion."""

    def test_native_round_trip(self):
        rng = random.Random(3)
        for width in (8, 16, 32, 64, 128):
            for v in [0, 1, (1 << width) - 1] + [rng.getrandbits(width) for _ in range(20)]:
                self.assertEqual(UnsignedMagnitude.from_native(v, width).to_native(width), v)

    def test_native_out_of_range(self):
        with self.assertRaises(ValueError):
            UnsignedMagnitude.from_native(256, 8)
        with self.assertRaises(NegativeValueError):
            UnsignedMagnitude.from_native(-1)
        with self.assertRaises(ValueError):
            UnsignedMagnitude.from_native(1, 24)

    def test_numpy_scalars(self):
        self.assertEqual(UnsignedMagnitude.from_native(np.uint8(200)).to_native(8), 200)
        self.assertEqual(UnsignedMagnitude.from_native(np.uint64(2 ** 64 - 1)).to_u64(), 2 ** 64 - 1)

    def test_to_native_too_large(self):
        value = UnsignedMagnitude.from_u64(256)
        with self.assertRaises(ValueTooLargeError):
            value.to_native(8)
        self.assertEqual(value.to_native(16), 256)
        with self.assertRaises(ValueTooLargeError):
            mag(1 << 64).to_u64()

    def test_hex_parse(self):
        self.assertEqual(UnsignedMagnitude.from_hex_str("deadBEEF").to_u64(), 0xDEADBEEF)
        self.assertEqual(UnsignedMagnitude.from_hex_str("0000").length, 0)
        self.assertEqual(UnsignedMagnitude.from_hex_str("1" + "0" * 16).blocks, (0, 1))

    def test_strings(self):
        self.assertEqual(UnsignedMagnitude.from_u64(10).to_bin_string(), "1010")
        self.assertEqual(UnsignedMagnitude().to_bin_string(), "0")
        self.assertEqual(UnsignedMagnitude().to_hex_string(), "0")
        value = mag((1 << 64) + 0xAB)
        self.assertEqual(value.to_hex_string(), "100000000000000AB")
        self.assertEqual(value.to_dec_string(), str((1 << 64) + 0xAB))

    def test_from_float(self):
        self.assertEqual(UnsignedMagnitude.from_float(12345.9).to_u64(), 12345)
        self.assertTrue(UnsignedMagnitude.from_float(0.5).is_zero())
        self.assertEqual(int(UnsignedMagnitude.from_float(2.0 ** 100)), 1 << 100)
        with self.assertRaises(NonFiniteError):
            UnsignedMagnitude.from_float(float("inf"))
        with self.assertRaises(NonFiniteError):
            UnsignedMagnitude.from_float(float("nan"))
        with self.assertRaises(NegativeValueError):
            UnsignedMagnitude.from_float(-1.0)

    def test_to_float(self):
        self.assertEqual(UnsignedMagnitude.from_u64(12345).to_float(), 12345.0)
        self.assertEqual(mag(1 << 100).to_float(), 2.0 ** 100)
        with self.assertRaises(NonFiniteError):
            UnsignedMagnitude.power_of_two(1100).to_float()

    def test_numpy_blocks(self):
        value = mag((3 << 64) | 7)
        arr = value.to_array()
        self.assertEqual(arr.dtype, np.uint64)
        self.assertEqual(arr.tolist(), [7, 3])
        self.assertEqual(UnsignedMagnitude.from_array(arr), value)
        trimmed = UnsignedMagnitude.from_array(np.array([5, 0, 0], dtype=np.uint64))
        self.assertEqual(trimmed.blocks, (5,))


if __name__ == "__main__":
    unittest.main()
