# -*- coding: utf-8 -*-
"""
Reinforcement learning for Threes!: board dynamics, an n-tuple network trained by TD(0) and a
one-ply expectimax slider.
"""
