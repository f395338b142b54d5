from remote_testkit.runners.results import ErrorInfo, Suite, Test, parse_node, parse_suite, parse_test


def test_counts_follow_tree():
    suite = Suite(id="root", tests=[
        Test(id="a"),
        Test(id="b", error=ErrorInfo()),
        Suite(id="child", has_parent=True, tests=[Test(id="c", skipped="later"), Test(id="d")]),
    ])
    assert suite.num_tests == 4
    assert suite.num_failed_tests == 1
    assert suite.num_skipped_tests == 1


def test_parse_suite_tree():
    suite = parse_suite({
        "id": "chrome",
        "name": "chrome 120",
        "sessionId": "s1",
        "tests": [
            {"id": "chrome - app", "tests": [
                {"id": "chrome - app - ok", "timeElapsed": 5},
                {"id": "chrome - app - bad", "error": {"name": "TypeError", "message": "x is undefined"}},
            ]},
            {"id": "chrome - skipped", "skipped": True},
        ],
    })
    assert suite.session_id == "s1"
    assert not suite.has_parent
    child = suite.tests[0]
    assert isinstance(child, Suite) and child.has_parent
    assert child.tests[1].error == ErrorInfo("TypeError", "x is undefined")
    assert suite.tests[1].skipped == "skipped"
    assert (suite.num_tests, suite.num_failed_tests, suite.num_skipped_tests) == (3, 1, 1)


def test_parse_test_defaults():
    test = parse_test({"id": "t"})
    assert test.name == "t"
    assert test.error is None
    assert test.skipped is None
    assert test.time_elapsed == 0.0


def test_parse_node_tells_suites_from_tests():
    assert isinstance(parse_node({"id": "s", "tests": []}), Suite)
    assert isinstance(parse_node({"id": "t"}), Test)


def test_error_from_string():
    assert ErrorInfo.from_data("boom") == ErrorInfo(message="boom")
    assert ErrorInfo.from_data(None) is None


def test_update_keeps_identity():
    suite = Suite(id="s", name="old")
    suite.update(Suite(id="s", name="new", tests=[Test(id="t")]))
    assert suite.name == "new"
    assert suite.num_tests == 1


def test_reported_counts_win_over_tree():
    suite = parse_suite({"id": "s", "numTests": 10, "numFailedTests": 2, "numSkippedTests": 1,
                         "tests": [{"id": "t"}]})
    assert (suite.num_tests, suite.num_failed_tests, suite.num_skipped_tests) == (10, 2, 1)
