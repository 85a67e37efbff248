"""CLI scripts"""
