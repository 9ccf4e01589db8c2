#!/usr/bin/env python3
"""Hosted entry point: launches the Poet's Pal Gradio interface."""

from poets_pal.app.app import main

if __name__ == "__main__":
    main()
