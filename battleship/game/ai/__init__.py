"""Computer targeting strategies."""
