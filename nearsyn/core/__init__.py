"""Contract model, configuration and errors"""
