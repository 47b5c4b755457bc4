"""Tests for frame identities and frame predicates."""

import unittest

from framegraph import frames
from framegraph.epoch import Epoch


class TestFrameEquality(unittest.TestCase):
    """Frames compare by class and realization parameters."""

    def test_singleton_frames_equal(self):
        self.assertEqual(frames.ICRF(), frames.ICRF())
        self.assertEqual(hash(frames.GCRF()), hash(frames.GCRF()))

    def test_different_classes_differ(self):
        self.assertNotEqual(frames.ICRF(), frames.GCRF())

    def test_itrf_realizations(self):
        self.assertEqual(frames.ITRF(2008), frames.ITRF(2008))
        self.assertNotEqual(frames.ITRF(2008), frames.ITRF(2014))

    def test_named_frames(self):
        self.assertEqual(frames.NamedFrame("LVLH"), frames.NamedFrame("LVLH"))
        self.assertNotEqual(frames.NamedFrame("LVLH"), frames.NamedFrame("RSW"))

    def test_usable_as_dict_keys(self):
        table = {frames.ITRF(2014): "a", frames.GCRF(): "b"}
        self.assertEqual(table[frames.ITRF(2014)], "a")
        self.assertEqual(table[frames.GCRF()], "b")

    def test_frames_are_immutable(self):
        frame = frames.ITRF(2014)
        with self.assertRaises(AttributeError):
            frame.year = 2020


class TestFrameLabels(unittest.TestCase):

    def test_labels(self):
        self.assertEqual(str(frames.ICRF()), "ICRF")
        self.assertEqual(str(frames.ITRF(2020)), "ITRF2020")
        self.assertEqual(str(frames.NamedFrame("Moon PA")), "Moon PA")

    def test_itrf_year_must_be_int(self):
        with self.assertRaises(TypeError):
            frames.ITRF(2014.0)
        with self.assertRaises(TypeError):
            frames.ITRF(True)

    def test_itrf_epoch(self):
        self.assertEqual(frames.ITRF(2000).epoch, Epoch.j2000())


class TestPredicates(unittest.TestCase):

    def test_is_itrf(self):
        predicate = frames.is_itrf(2014)
        self.assertTrue(predicate(frames.ITRF(2014)))
        self.assertFalse(predicate(frames.ITRF(2008)))
        self.assertFalse(predicate(frames.GCRF()))

    def test_exact_frame(self):
        predicate = frames.exact_frame(frames.NamedFrame("F0"))
        self.assertTrue(predicate(frames.NamedFrame("F0")))
        self.assertFalse(predicate(frames.NamedFrame("F1")))


if __name__ == '__main__':
    unittest.main()
