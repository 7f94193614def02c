"""
Streaming ROC / AUC evaluation on a fixed threshold grid.
"""
