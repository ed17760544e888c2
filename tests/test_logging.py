import logging
from unittest import TestCase
from timedset import logging as tslogging
from timedset.timed_set import TimedSet


class LoggingTest(TestCase):
    def test_logger_cached(self):
        logger = tslogging.get_logger('test_cached')
        self.assertIs(logger, tslogging.get_logger('test_cached'))
        self.assertEqual('timedset.test_cached', logger.name)

    def test_library_adds_no_output_handlers(self):
        logger = tslogging.get_logger('test_handlers')
        self.assertTrue(logger.propagate)
        self.assertTrue(all(isinstance(h, logging.NullHandler) for h in logger.handlers))
        self.assertEqual(logging.NOTSET, logger.level)

    def test_drain_records_reach_host_handlers(self):
        ts = TimedSet(10)
        ts.add('foo')
        ts.add('bar', 0)
        with self.assertLogs('timedset', level='DEBUG') as cm:
            self.assertListEqual(['foo'], list(ts))
        self.assertEqual(1, len(cm.records))
        self.assertEqual('timedset.timed_set', cm.records[0].name)
        self.assertIn('1 yielded, 1 expired discarded', cm.records[0].getMessage())
