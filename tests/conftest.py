import io
import datetime
import logging
import pathlib

import numpy as np
import pytest


LOG_DIR = pathlib.Path(__file__).parent / "test-logs"


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    # Attach the TestReport (with .outcome) to the item so fixtures can see the
    # outcome in teardown.
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


@pytest.fixture(autouse=True)
def capture_test_logs(request):
    """Capture package logging for each test into an in-memory buffer and
    write it to a file only when the test fails.
    """
    pkg_logger = logging.getLogger("delaunay2d")
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    pkg_logger.addHandler(handler)
    prev_level = pkg_logger.level
    pkg_logger.setLevel(logging.DEBUG)

    try:
        yield
    finally:
        pkg_logger.removeHandler(handler)
        pkg_logger.setLevel(prev_level)

        rep = getattr(request.node, "rep_call", None)
        if rep is not None and getattr(rep, "outcome", None) == "failed":
            LOG_DIR.mkdir(exist_ok=True)
            nodeid = request.node.nodeid.replace("::", "__").replace("/", "_")
            ts = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
            fname = LOG_DIR / "{}__{}.log".format(nodeid, ts)
            with open(fname, "w", encoding="utf-8") as f:
                f.write("=== Test: {}\n".format(request.node.nodeid))
                f.write("=== Timestamp: {}\n\n".format(ts))
                f.write(buf.getvalue())


@pytest.fixture
def random_points():
    rng = np.random.default_rng(20240517)
    return rng.random((100, 2))


@pytest.fixture
def square_points():
    return [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)]
