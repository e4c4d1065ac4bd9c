"""
Practice Engine Services

- practice: Session flow, answer evaluation, cards and feedback
- performance: Grammar topic confidence and history
"""
