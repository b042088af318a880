__all__ = 'Thread',

import threading


class Thread(threading.Thread):
    """no-frills thread with a return value

    >>> Thread(lambda: 1 + 2).start().join()
    3

    An exception raised by the target is re-raised by join():

    >>> Thread(lambda: 1 / 0).start().join()
    Traceback (most recent call last):
    ...
    ZeroDivisionError: division by zero
    """
    def __init__(self, target):
        """initilialize the thread

        target: callable which takes no arguments
        """
        self.result = None
        self.error = None

        def closure():
            try:
                self.result = target()
            except BaseException as e:
                self.error = e

        super().__init__(target=closure, name=Thread.get_name(target), daemon=True)

    def start(self):
        """start the thread"""
        super().start()
        return self

    def join(self, timeout=None):
        """join the thread, returning the target's result or raising its error"""
        super().join(timeout)
        if self.error is not None:
            error, self.error = self.error, None
            raise error
        return self.result

    @staticmethod
    def get_name(func):
        """give a decent name to the thread"""
        if hasattr(func, 'func') and func.func is not func:
            return Thread.get_name(func.func)
        return repr(func)
