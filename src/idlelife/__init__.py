"""Idle Life: an incremental life-and-reincarnation game."""
