"""
Members App - Team Members and Cash Deposits

Members belong to a company and carry a running balance. A negative
balance is what the member owes the company. Food summaries debit the
members who did not bring food; cash deposits credit a member.

Members are never deleted through the API, only deactivated, so stored
food summaries keep every member they were settled against.
"""
