# Onboarding writes to: users, households, household_members, invitations, tasks
# No tables of its own; see the models.py of those modules.

"""
Wizard steps, in order:

1. start     - mirror the profile, create "<name>'s Household" with the user
               as owner (or reuse the household the user already belongs to)
2. profile   - set users.full_name
3. invite    - insert one invitations row per non-blank email (optional)
4. first task - insert a tasks row, "Welcome Task" by default (optional)
5. complete  - set users.onboard_success = true
"""
