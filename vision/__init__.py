"""
Image processing algorithms: filters, thresholds, morphology, edges,
contours, geometric transforms and fixed-geometry detections.
"""
