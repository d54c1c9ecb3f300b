"""Mentor-Link.

This package contains the contributor-management backend that tracks GitHub
issues as tasks, assigns them to students guided by mentors, scores the
finished work, books weekly meetings and sends notification emails.

High-level architecture
-----------------------

The codebase is organized around one engine and the collaborators it drives:

- **Task lifecycle**: a small state machine that moves a task from ``open``
  through ``assigned`` to ``completed`` or ``failed``. Every transition is a
  compare-and-set update, so its side effects run exactly once.
- **Score ledger**: monthly point rows per student. Completing a task credits
  its score, redeeming points consumes it, and a rollover carries the balance
  into the next month.
- **Side effects**: templated emails (``notifications``) and conference
  bookings on the meeting platform (``meeting``).

Core subpackages
----------------

- ``mentor_link.core``: logging, monitoring and the database layer
  (SQLModel entities and async repositories).
- ``mentor_link.lifecycle``: transitions, scoring and monthly reports.
- ``mentor_link.notifications``: template rendering and SMTP delivery.
- ``mentor_link.meeting``: Huawei Meeting API client and scheduling helpers.
- ``mentor_link.server``: the FastAPI application.
"""
