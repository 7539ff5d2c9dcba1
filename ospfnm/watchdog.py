#
# @descr    Global script timeout, modeled as a deadline token
#

import logging
import threading
from time import monotonic

# This is the global script margin on top of the SNMP timeout
TIMEOUT_MARGIN = 15
TIMEOUT_MESSAGE = 'Script timed out'

_LOGGER = logging.getLogger(__name__)


class ProbeTimeout(Exception):

    def __init__(self, message=TIMEOUT_MESSAGE):
        super(ProbeTimeout, self).__init__(message)


class Deadline(object):
    """Wall-clock budget for one probe run.

    Handed to every stage that may block. Once expired or cancelled it
    stays that way, and check() raises ProbeTimeout. Resources registered
    with on_cancel() are released by whoever cancels it.
    """

    def __init__(self, seconds, clock=monotonic):
        self.seconds = seconds
        self._clock = clock
        self._expires_at = clock() + seconds
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._callbacks = []

    def remaining(self):
        return max(0.0, self._expires_at - self._clock())

    def on_cancel(self, callback):
        with self._lock:
            if not self._cancelled.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def cancel(self):
        with self._lock:
            self._cancelled.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    @property
    def cancelled(self):
        return self._cancelled.is_set()

    def expired(self):
        return self.cancelled or self._clock() >= self._expires_at

    def check(self):
        if self.expired():
            raise ProbeTimeout()


def arm(snmp_timeout, margin=TIMEOUT_MARGIN):
    _LOGGER.debug("Alarm at %s + %s", margin, snmp_timeout)
    return Deadline(snmp_timeout + margin)


# Runs func(*args) on a worker thread and gives up on it once the deadline passes.
# Cancelling the deadline closes whatever the worker registered on it, so the
# session is released here before the timeout gets reported.
def run_with_deadline(deadline, func, *args):
    outcome = {}

    def worker():
        try:
            outcome['result'] = func(*args)
        except Exception as err:
            outcome['error'] = err

    thread = threading.Thread(target=worker, name='ospf-probe')
    thread.daemon = True
    thread.start()
    thread.join(deadline.remaining())
    if thread.is_alive():
        deadline.cancel()
        raise ProbeTimeout()
    if 'error' in outcome:
        raise outcome['error']
    return outcome['result']
