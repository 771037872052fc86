"""Pytest plumbing: absl flags are normally parsed by absltest.main()."""

from absl import flags


def pytest_configure(config):
    if not flags.FLAGS.is_parsed():
        flags.FLAGS.mark_as_parsed()
