"""Pytest configuration for domain package tests."""

import pytest


SAMPLE_CV = """# Jane Doe

jane@example.com | +1 555 0100 | Berlin

## Professional Summary

Backend engineer with **8 years** of experience building *reliable* services.

## Experience

### Senior Engineer

**Acme Corp** | 2020 - Present

- Led the payments platform migration
- Cut p99 latency by 40%

## Education

### M.Sc. Computer Science
"""


@pytest.fixture
def sample_cv() -> str:
    return SAMPLE_CV
