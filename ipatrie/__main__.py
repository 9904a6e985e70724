#!/usr/bin/env python
# coding=utf-8

"""Run the ipatrie command line interface."""

from .ipatrie import main

main()
