"""Face Scan Attendance package.

This package is organized by feature modules (identities, recognition,
attendance) with a thin Flask controller layer and service/repository layers.
"""
