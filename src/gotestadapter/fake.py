# src/gotestadapter/fake.py

"""
Built-in tree published when no workspace folder is open.
"""

from gotestadapter.tree import SuiteNode, TestNode

FAKE_TEST_SUITE = SuiteNode(
    id="root",
    # the root label names the testing framework
    label="Fake",
    children=(
        SuiteNode(
            id="nested",
            label="Nested suite",
            children=(
                TestNode(id="test1", label="Test #1"),
                TestNode(id="test2", label="Test #2"),
            ),
        ),
        TestNode(id="test3", label="Test #3"),
        TestNode(id="test4", label="Test #4"),
    ),
)
