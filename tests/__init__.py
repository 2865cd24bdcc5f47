"""
Bike Sharing Report Test Suite

- test_config.py — configuration defaults and overrides
- test_validate.py — fail-loud table gates
- test_ingest.py — archive download / extract / load (fake session, no network)
- test_explore.py — summary tables and static charts
- test_smoothing.py — LOESS length / index contract
- test_decomposition.py — multiplicative decomposition properties
- test_evaluation.py — metrics (NaN handling)
- test_forecasting.py — AutoARIMA horizon, intervals, determinism
- test_interactive.py — plotly figures, one band per interval level
- test_io_utils.py — atomic writes clean up after failure
- test_cli.py — typer commands
- test_report.py — end-to-end smoke run on synthetic data
- test_known_dataset.py — published dataset facts (network, opt-in)
"""
