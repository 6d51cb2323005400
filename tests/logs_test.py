import logging
import unittest


class Logs_test(unittest.TestCase):

    def test_set_debug(self):
        import logs

        try:
            self.assertEqual(logs.set_debug(0), logging.WARNING)
            self.assertEqual(logs.set_debug(1), logging.INFO)
            self.assertEqual(logs.set_debug(3), logging.DEBUG)
            self.assertEqual(logs.logger.level, logging.DEBUG)
        finally:
            logs.set_debug(0)

    def test_logger_names(self):
        import logs

        self.assertEqual(logs.logger.name, "untar")
        self.assertEqual(logs.logger_print.name, "untar.print")
        self.assertFalse(logs.logger_print.propagate)


if __name__ == "__main__":
    unittest.main()
