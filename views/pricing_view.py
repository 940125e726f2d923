import streamlit as st

from services import catalog_service


def _price_label(plan):
    if not plan.is_priced:
        return "Custom"
    return f"${plan.price:,.0f}"


def render_pricing(select_plan):
    st.title("Pricing")
    st.caption("Fixed-price packages. Pay online or talk to us first.")

    plans = catalog_service.PLANS
    cols = st.columns(len(plans))
    for col, plan in zip(cols, plans):
        with col:
            features = "".join(f"<li>{feature}</li>" for feature in plan.features)
            st.markdown(
                f"""
                <div class="nl-card {'featured' if plan.featured else ''}">
                  <div class="nl-title">{plan.name}</div>
                  <div class="nl-price">{_price_label(plan)}</div>
                  <div class="nl-sub">{plan.tagline}</div>
                  <ul>{features}</ul>
                </div>
                """,
                unsafe_allow_html=True,
            )
            st.button(
                "Choose plan" if plan.is_priced else "Contact us",
                key=f"plan_{plan.id}",
                on_click=select_plan,
                args=(plan.id,),
                type="primary" if plan.featured else "secondary",
                use_container_width=True,
            )
