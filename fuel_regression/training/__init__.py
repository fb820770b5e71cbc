"""
Training Doctrine (FINAL / FROZEN)

------------------------------------------------------------
Run shape
------------------------------------------------------------

- One run = one CLOSED dataset, fully materialized in memory
- One model per run, freshly initialised; never persisted
- Normalization parameters are computed ONCE per run and are
  the only valid inverse for that run's predictions

------------------------------------------------------------
Ownership
------------------------------------------------------------

- Model parameters are written ONLY by a ModelTrainEngine
- At most one fit() may write a given model at a time
- Prediction reads the model; it never trains

------------------------------------------------------------
Numeric safety
------------------------------------------------------------

- Non-finite inputs are removed before any tensor exists
- Zero-range columns are rejected, never divided by
- A non-finite loss ends the run; it is reported first

Non-goals:
- Multi-feature regression
- Model persistence / serialization
- Hyperparameter search
- GPU placement
"""
