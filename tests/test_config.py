import unittest

from nine_mens_morris.config import Config, config


class TestConfig(unittest.TestCase):
    def test_default_values(self):
        cfg = Config()
        self.assertEqual(cfg.BOARD_SIZE, 7)
        self.assertEqual(cfg.PIECES_PER_PLAYER, 9)
        self.assertEqual(cfg.FLYING_THRESHOLD, 3)
        self.assertEqual(cfg.MIDPOINT, 3)

    def test_module_instance(self):
        self.assertEqual(config.MIDPOINT, 3)
        self.assertGreaterEqual(config.MAX_TURNS, 1)

    def test_custom_values(self):
        cfg = Config(MAX_TURNS=50, LOG_LEVEL="DEBUG", SEED=3)
        self.assertEqual(cfg.MAX_TURNS, 50)
        self.assertEqual(cfg.LOG_LEVEL, "DEBUG")
        self.assertEqual(cfg.SEED, 3)

    def test_only_standard_board(self):
        with self.assertRaises(ValueError):
            Config(BOARD_SIZE=9)

    def test_turn_limit_must_be_positive(self):
        with self.assertRaises(ValueError):
            Config(MAX_TURNS=0)


if __name__ == "__main__":
    unittest.main()
