"""Prompting package.

This package contains deterministic prompt-construction helpers and the
component catalog advertised to the code-generation model. It does not perform
validation, image retrieval or model invocation.
"""
