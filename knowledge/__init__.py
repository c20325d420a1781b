"""
Clinicalc knowledge base.

Static clinical reference data:
- Growth charts (CDC 2000 BMI-for-age LMS)
- Paley height multiplier tables
- National identifier region codes
"""
