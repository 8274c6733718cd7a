"""WageTrack package.

Shift logging and payroll reporting for small employers, organized by feature
modules (accounts, employees, attendance, payroll) with a thin Flask controller
layer over service/repository layers.
"""
