"""Instrumentation (step counter, scoped timer) and the comparison sweep runner."""
