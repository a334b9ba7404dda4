"""Fixed title and caption text of the report, in figure order."""

REPORT_TITLE = "Dairy consumption among children aged 6-23 months"

REPORT_INTRO = (
    "This report describes how often young children consume dairy products "
    "around the world, how consumption differs between boys and girls, and "
    "how it relates to national income and life expectancy."
)

CHOROPLETH_TITLE = "Dairy consumption around the world"
CHOROPLETH_CAPTION = (
    "Average share of children aged 6-23 months who consumed dairy, over all "
    "observed years. Countries in grey have no observation or a name that "
    "does not match the map reference."
)

GENDER_SPLIT_TITLE = "Top 15 countries by sex"
GENDER_SPLIT_CAPTION = (
    "Average dairy consumption of boys and girls for the 15 countries with "
    "the highest combined average. Each bar stacks the male average under "
    "the female average."
)

ECONOMIC_TITLE = "Dairy consumption, income and life expectancy"
ECONOMIC_CAPTION = (
    "Each point is a country: its average dairy consumption against its "
    "average GDP per capita (left) and life expectancy at birth (right), "
    "with a least-squares trend line. Cuba, Uruguay, Burundi, Swaziland and "
    "Sudan are labelled."
)

YEARLY_TREND_TITLE = "Dairy consumption and GDP over time"
YEARLY_TREND_CAPTION = (
    "Yearly totals of dairy consumption and of GDP per capita across all "
    "countries. GDP is rescaled to share the dairy axis and is read on the "
    "right-hand axis; 2020 is left out as a data-quality exception."
)
