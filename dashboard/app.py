import logging
import sys
from pathlib import Path

src_path = Path(__file__).resolve().parents[1] / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import gradio as gr
import pandas as pd

from gemini_insights import (
    InsightBoard,
    InsightClient,
    configure_logging,
    get_settings,
    load_sample_data,
)

# Set up logging
configure_logging()
logger = logging.getLogger(__name__)


def _bullets(items):
    return "\n".join(f"- {item}" for item in items) or "_Nothing to report._"


class InsightsApp:
    def __init__(self, sales=None, products=None, client=None):
        """Initialize the app with the bundled sample data unless data is supplied"""
        if sales is None or products is None:
            sales, products = load_sample_data()
        self.sales = sales
        self.products = products
        self.board = InsightBoard(client or InsightClient(get_settings()))
        logger.info(f"Loaded {len(self.sales)} sales and {len(self.products)} products")

    def render(self):
        """Turn the board's current batch into values for each output component"""
        batch = self.board.batch
        if batch is None:
            empty = pd.DataFrame()
            return self.board.error or "No insights yet.", "", empty, empty, "", ""

        analytics = batch.analytics.value
        analytics_md = f"""### Summary
{analytics.summary}

### Recommendations
{_bullets(analytics.recommendations)}

### Trends
{_bullets(analytics.trends)}

### Alerts
{_bullets(analytics.alerts)}"""

        inventory = batch.inventory.value
        low_stock = pd.DataFrame(
            [item.to_dict() for item in inventory.low_stock],
            columns=["productName", "currentStock", "recommendedStock"],
        )
        top_products = pd.DataFrame(
            [item.to_dict() for item in inventory.top_products],
            columns=["productName", "salesCount"],
        )

        if batch.degraded:
            status = "Some insights are showing static fallback content (Gemini unavailable)."
        else:
            status = "Connected to Gemini AI."
        if self.board.error:
            status = f"{self.board.error} Showing the last insights that loaded."
        return (
            status,
            analytics_md,
            low_stock,
            top_products,
            _bullets(inventory.insights),
            batch.prediction.value,
        )

    async def refresh(self):
        """Run a new insight batch and render whatever the board shows afterwards"""
        await self.board.refresh(self.sales, self.products)
        return self.render()

    def launch(self):
        """Launch the Gradio interface"""
        with gr.Blocks(title="AI Insights") as interface:
            gr.Markdown("# AI Assistant\nSmart analysis of your business in real time")
            refresh_btn = gr.Button("Refresh insights", variant="primary")
            status = gr.Textbox(label="Status", lines=1)

            with gr.Tabs():
                with gr.Tab("Analytics"):
                    analytics_md = gr.Markdown()
                with gr.Tab("Inventory"):
                    low_stock = gr.Dataframe(label="Low stock")
                    top_products = gr.Dataframe(label="Top products")
                    inventory_md = gr.Markdown()
                with gr.Tab("Predictions"):
                    prediction_md = gr.Markdown()

            outputs = [status, analytics_md, low_stock, top_products, inventory_md, prediction_md]
            interface.load(fn=self.refresh, outputs=outputs)
            refresh_btn.click(fn=self.refresh, outputs=outputs)

        # Try ports in range 7860-7870
        for port in range(7860, 7871):
            try:
                interface.launch(share=False, server_name="0.0.0.0", server_port=port)
                break
            except OSError:
                if port == 7870:
                    logger.error("Could not find an available port. Please try again later.")
                    return
                continue


if __name__ == "__main__":
    app = InsightsApp()
    app.launch()
