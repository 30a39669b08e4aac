"""Stock, fund and index queries and record types for the EastMoney data services."""