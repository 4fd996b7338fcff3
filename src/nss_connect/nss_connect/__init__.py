"""NSS Connect backend.

Volunteer attendance-and-hours ledger for a student service organization.
Organized by feature modules (users, events, attendance, volunteers) with a thin
Flask controller layer over service/repository layers.
"""
