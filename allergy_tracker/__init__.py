# -*- coding: utf-8 -*-
"""Allergy tracker backend: per-food symptom attribution scores."""
