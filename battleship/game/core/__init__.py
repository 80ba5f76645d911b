"""Boards, ships, placement, salvo rules and turn flow."""
