"""Property-based testing for FlowKPI.

These tests use Hypothesis to generate flow documents of both shapes, with
missing and mistyped fields, and check the invariants every analysis must
hold: bounded scores, no exceptions and deterministic results.
"""
