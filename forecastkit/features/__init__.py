"""Feature modules: forecasting strategies and hold-out evaluation."""
