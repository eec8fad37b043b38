"""
Unit tests for the SignalTrading simulation.

This package contains tests for:
- Position accounting and strategy signals
- Trading system orchestration and concurrency
- Price replay, trade reporting and configuration
"""
