"""
calculator_api – HTTP front end for co2_calculator.
"""
