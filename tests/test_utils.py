import numpy as np
import pytest

from labmap.utils import run_threads


def test_run_threads_covers_all_items():
    seen = np.zeros(1000, int)
    def mark(_, start, stop): seen[start:stop] += 1
    run_threads(mark, 1000, 64, 4)
    assert (seen == 1).all()

def test_run_threads_nothing_to_do():
    calls = []
    run_threads(lambda *args: calls.append(args), 0, 1, 4)
    assert calls == []

@pytest.mark.parametrize('nthreads', [1, 2, 4])
def test_run_threads_reraises_worker_errors(nthreads):
    def fail(_, start, stop):
        if start <= 500 < stop: raise ZeroDivisionError('chunk %d-%d' % (start, stop))
    with pytest.raises(ZeroDivisionError):
        run_threads(fail, 1000, 64, nthreads)
