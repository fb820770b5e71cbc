"""
Concrete ModelTrainEngine implementations.

Organizational namespace only; import engines from training steps.
"""
